"""
Application constants and enums.
"""

from enum import Enum

# Loyalty program
STAMP_EXPIRATION_DAYS = 180
DEFAULT_STAMPS_GOAL = 8
DEFAULT_MIN_ORDER = 50
DEFAULT_REWARD_VALUE = 50

# Kitchen / KDS
URGENT_ORDER_MINUTES = 10
KDS_MAX_ACTIVE_ORDERS = 50
KDS_HISTORY_LIMIT = 50

# Push notifications
PUSH_TTL_SECONDS = 3600
PUSH_SUBSCRIPTION_EXPIRY_HOURS = 24

# Cart
CART_DEBOUNCE_MS = 500

# Phone validation
PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 11

# Image URL validation (secure transport only)
ALLOWED_IMAGE_PROTOCOLS = ("https",)

# Query cache windows
RESTAURANT_STALE_SECONDS = 5 * 60
RESTAURANT_LIST_STALE_SECONDS = 2 * 60
FEATURED_STALE_SECONDS = 5 * 60
BUSINESS_HOURS_STALE_SECONDS = 10 * 60
CUSTOMER_STAMPS_STALE_SECONDS = 30
PLATFORM_REFETCH_SECONDS = 60
# Entries unused for this long are evicted (never less than their stale time)
QUERY_GC_SECONDS = 5 * 60

# Query limits
STAMP_TRANSACTIONS_DEFAULT_LIMIT = 50
FEATURED_PRODUCTS_DEFAULT_LIMIT = 4

# PWA install prompt
PWA_DISMISS_HOURS = 24
PWA_SECOND_VISIT_THRESHOLD = 2

# Head metadata
DEFAULT_TITLE = "Delivery"
DEFAULT_DESCRIPTION = "Peça pelo app com entrega rápida"
DEFAULT_THEME_COLOR = "#000000"
MANIFEST_SHORT_NAME_LENGTH = 12


class RestaurantStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class ScheduleMode(str, Enum):
    AUTO = "auto"
    MANUAL = "manual"


class StampTransactionType(str, Enum):
    EARNED = "earned"
    REDEEMED = "redeemed"
    EXPIRED = "expired"
    MANUAL_ADJUSTMENT = "manual_adjustment"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELLED = "cancelled"
    NONE = "none"


# Badges for the platform panel: value -> (label, variant)
RESTAURANT_STATUS_BADGES = {
    RestaurantStatus.ACTIVE.value: ("Ativo", "default"),
    RestaurantStatus.INACTIVE.value: ("Inativo", "destructive"),
    RestaurantStatus.SUSPENDED.value: ("Suspenso", "destructive"),
}

SUBSCRIPTION_STATUS_BADGES = {
    SubscriptionStatus.ACTIVE.value: ("Ativo", "default"),
    SubscriptionStatus.TRIALING.value: ("Trial", "secondary"),
    SubscriptionStatus.PAST_DUE.value: ("Inadimplente", "destructive"),
    SubscriptionStatus.CANCELLED.value: ("Cancelado", "destructive"),
    SubscriptionStatus.NONE.value: ("Sem plano", "outline"),
}

STAMP_TRANSACTION_LABELS = {
    StampTransactionType.EARNED.value: "Ganho",
    StampTransactionType.REDEEMED.value: "Resgatado",
    StampTransactionType.EXPIRED.value: "Expirado",
    StampTransactionType.MANUAL_ADJUSTMENT.value: "Ajuste manual",
}

# Sunday first, matching business_hours.day_of_week
DAY_NAMES = ["Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado"]
DAY_NAMES_LONG = [
    "Domingo",
    "Segunda-feira",
    "Terça-feira",
    "Quarta-feira",
    "Quinta-feira",
    "Sexta-feira",
    "Sábado",
]
