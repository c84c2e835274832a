from bangaliana.models.audit_log import AuditLog
from bangaliana.models.food import Food
from bangaliana.models.order import Order
from bangaliana.models.payment import Payment
from bangaliana.models.review import Review
from bangaliana.models.user import User
from bangaliana.models.user_profile import UserProfile

__all__ = [
    "AuditLog",
    "Food",
    "Order",
    "Payment",
    "Review",
    "User",
    "UserProfile",
]
