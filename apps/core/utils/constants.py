"""
Application-wide constants
"""

# Subscription plan types (cadence)
PLAN_TYPE_WEEKLY = 'weekly'
PLAN_TYPE_BIWEEKLY = 'biweekly'

PLAN_TYPES = [
    (PLAN_TYPE_WEEKLY, 'Weekly'),
    (PLAN_TYPE_BIWEEKLY, 'Biweekly'),
]

PLAN_TYPE_INTERVAL_DAYS = {
    PLAN_TYPE_WEEKLY: 7,
    PLAN_TYPE_BIWEEKLY: 14,
}

# Labels used in customer-facing names and WhatsApp messages
PLAN_TYPE_LABELS_PT = {
    PLAN_TYPE_WEEKLY: 'Semanal',
    PLAN_TYPE_BIWEEKLY: 'Quinzenal',
}

# Appointment statuses
APPOINTMENT_STATUS_SCHEDULED = 'scheduled'
APPOINTMENT_STATUS_IN_PROGRESS = 'in_progress'
APPOINTMENT_STATUS_COMPLETED = 'completed'
APPOINTMENT_STATUS_CANCELLED = 'cancelled'
APPOINTMENT_STATUS_NO_SHOW = 'no_show'

APPOINTMENT_STATUSES = [
    (APPOINTMENT_STATUS_SCHEDULED, 'Scheduled'),
    (APPOINTMENT_STATUS_IN_PROGRESS, 'In Progress'),
    (APPOINTMENT_STATUS_COMPLETED, 'Completed'),
    (APPOINTMENT_STATUS_CANCELLED, 'Cancelled'),
    (APPOINTMENT_STATUS_NO_SHOW, 'No Show'),
]

# Appointments that still occupy a barber's agenda
PENDING_APPOINTMENT_STATUSES = [
    APPOINTMENT_STATUS_SCHEDULED,
    APPOINTMENT_STATUS_IN_PROGRESS,
]

# Subscription statuses
SUBSCRIPTION_STATUS_ACTIVE = 'active'
SUBSCRIPTION_STATUS_PAUSED = 'paused'
SUBSCRIPTION_STATUS_CANCELLED = 'cancelled'
SUBSCRIPTION_STATUS_COMPLETED = 'completed'

SUBSCRIPTION_STATUSES = [
    (SUBSCRIPTION_STATUS_ACTIVE, 'Active'),
    (SUBSCRIPTION_STATUS_PAUSED, 'Paused'),
    (SUBSCRIPTION_STATUS_CANCELLED, 'Cancelled'),
    (SUBSCRIPTION_STATUS_COMPLETED, 'Completed'),
]

# Subscriptions that still hold future work
LIVE_SUBSCRIPTION_STATUSES = [
    SUBSCRIPTION_STATUS_ACTIVE,
    SUBSCRIPTION_STATUS_PAUSED,
]

# Subscription change log types
CHANGE_TYPE_CREATED = 'created'
CHANGE_TYPE_PLAN_CHANGED = 'plan_changed'
CHANGE_TYPE_APPOINTMENT_ADJUSTED = 'appointment_adjusted'
CHANGE_TYPE_PAUSED = 'paused'
CHANGE_TYPE_RESUMED = 'resumed'
CHANGE_TYPE_CANCELLED = 'cancelled'
CHANGE_TYPE_BARBER_TRANSFERRED = 'barber_transferred'

SUBSCRIPTION_CHANGE_TYPES = [
    (CHANGE_TYPE_CREATED, 'Created'),
    (CHANGE_TYPE_PLAN_CHANGED, 'Plan Changed'),
    (CHANGE_TYPE_APPOINTMENT_ADJUSTED, 'Appointment Adjusted'),
    (CHANGE_TYPE_PAUSED, 'Paused'),
    (CHANGE_TYPE_RESUMED, 'Resumed'),
    (CHANGE_TYPE_CANCELLED, 'Cancelled'),
    (CHANGE_TYPE_BARBER_TRANSFERRED, 'Barber Transferred'),
]

# Barber deactivation policies
DEACTIVATION_ACTION_TRANSFER = 'transfer'
DEACTIVATION_ACTION_CANCEL = 'cancel'

DEACTIVATION_ACTIONS = [
    (DEACTIVATION_ACTION_TRANSFER, 'Transfer to another barber'),
    (DEACTIVATION_ACTION_CANCEL, 'Cancel all pending work'),
]

# Subscription limits
MIN_DURATION_MONTHS = 1
MAX_DURATION_MONTHS = 6

# Fallback when an appointment has no service attached
DEFAULT_APPOINTMENT_DURATION_MINUTES = 60
