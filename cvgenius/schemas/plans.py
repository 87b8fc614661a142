"""
Pydantic schemas for the pricing catalogue.
"""
from typing import List
from pydantic import BaseModel


class PlanInfo(BaseModel):
    id: str
    name: str
    price: float
    billing: str
    popular: bool = False
    features: List[str]


class PlansResponse(BaseModel):
    success: bool = True
    plans: List[PlanInfo]
