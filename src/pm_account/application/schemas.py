"""Pydantic schemas for pm_account API."""

from pydantic import BaseModel, Field


class DepositRequest(BaseModel):
    amount: int = Field(..., gt=0, description="Settlement units to credit")


class BalanceResponse(BaseModel):
    holder: str
    balance: int


class DepositResponse(BaseModel):
    holder: str
    amount: int
    balance: int
