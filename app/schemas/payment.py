from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from pydantic import BaseModel


class PaymentCreate(BaseModel):
    application_id: int


class Payment(BaseModel):
    id: int
    payment_id: str
    application_id: int
    user_id: int
    payment_type: str
    amount: Decimal
    currency: str
    status: str
    transaction_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GatewayHandoff(BaseModel):
    """What the client needs to open the gateway checkout."""
    key: str
    amount: int  # minor currency units
    currency: str
    order_id: str


class PaymentInitiated(BaseModel):
    payment: Payment
    payment_gateway: GatewayHandoff


class PaymentVerifyRequest(BaseModel):
    payment_id: str
    status: str  # pending, completed, failed
    transaction_id: Optional[str] = None
    gateway_response: Optional[Dict[str, Any]] = None
