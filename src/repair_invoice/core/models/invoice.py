from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class PaymentStatus(str, Enum):
    PAID = "paid"
    PARTIAL = "partial"
    PENDING = "pending"


@dataclass(frozen=True)
class CompanyInfo:
    """Shop profile printed in the header and the contact block."""

    name: str
    address: str = ""
    phone: str = ""
    email: Optional[str] = None
    website: Optional[str] = None
    tax_id: Optional[str] = None
    logo: Optional[str] = None  # path, URL or data: URI


@dataclass(frozen=True)
class CustomerInfo:
    name: str
    phone: str = ""
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class DeviceInfo:
    type: str = ""
    brand: str = ""
    model: str = ""
    imei: Optional[str] = None
    serial_number: Optional[str] = None
    condition: Optional[str] = None
    accessories: Optional[str] = None
    images: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CostBreakdown:
    labor_cost: float = 0.0
    parts_cost: float = 0.0
    service_cost: float = 0.0
    subtotal: float = 0.0
    tax_rate: Optional[float] = None
    tax_amount: Optional[float] = None
    discount: Optional[float] = None
    total: float = 0.0


@dataclass(frozen=True)
class InvoiceData:
    """
    Canonical input of one render call.
    Financial fields are filled by the calculator and are read-only afterwards.
    """

    invoice_number: str
    invoice_date: str
    company: CompanyInfo
    customer: CustomerInfo
    costs: CostBreakdown = field(default_factory=CostBreakdown)
    due_date: Optional[str] = None
    device: Optional[DeviceInfo] = None
    advance_received: Optional[float] = None
    balance_due: Optional[float] = None
    payment_status: Optional[PaymentStatus] = None
    delivery_date: Optional[str] = None
    warranty_period: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    notes: Optional[str] = None
    problem_description: Optional[str] = None
    diagnosis: Optional[str] = None
    tracking_url: Optional[str] = None

    @property
    def device_images(self) -> Tuple[str, ...]:
        return self.device.images if self.device else ()

    @property
    def has_terms(self) -> bool:
        return bool((self.terms_and_conditions or "").strip())
