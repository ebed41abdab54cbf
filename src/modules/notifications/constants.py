from django.db import models


class RecipientType(models.TextChoices):
    ADMIN = "admin", "Admin"
    RIDER = "rider", "Rider"
    CUSTOMER = "customer", "Customer"
    SYSTEM = "system", "System"


class Priority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    URGENT = "urgent", "Urgent"


ORDER_IMPORTED = "order_imported"
