from billwise.models.bill import BillStatus, Bucket

UTC_ZONE_NAME = "UTC"

# Fixed lookahead for the UPCOMING bucket; not user-configurable.
UPCOMING_HORIZON_DAYS = 7

# Upper bound on occurrences a single expansion may produce.
MAX_OCCURRENCES = 10_000

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
ISO_DATE_FORMAT = "%Y-%m-%d"

# Legacy profiles stored UTC offsets instead of zone names.
UTC_OFFSET_TO_IANA = {
    "UTC+05:30": "Asia/Kolkata",
    "UTC+05:45": "Asia/Kathmandu",
    "UTC+06:00": "Asia/Dhaka",
    "UTC+06:30": "Asia/Yangon",
    "UTC+07:00": "Asia/Bangkok",
    "UTC+08:00": "Asia/Shanghai",
    "UTC+09:00": "Asia/Tokyo",
    "UTC+09:30": "Australia/Adelaide",
    "UTC+10:00": "Australia/Sydney",
    "UTC+11:00": "Pacific/Norfolk",
    "UTC+12:00": "Pacific/Auckland",
    "UTC-11:00": "Pacific/Pago_Pago",
    "UTC-10:00": "Pacific/Honolulu",
    "UTC-09:00": "America/Anchorage",
    "UTC-08:00": "America/Los_Angeles",
    "UTC-07:00": "America/Denver",
    "UTC-06:00": "America/Chicago",
    "UTC-05:00": "America/New_York",
    "UTC-04:00": "America/Caracas",
    "UTC-03:00": "America/Sao_Paulo",
    "UTC-02:00": "Atlantic/South_Georgia",
    "UTC-01:00": "Atlantic/Azores",
    "UTC+00:00": "UTC",
    "UTC+01:00": "Europe/London",
    "UTC+02:00": "Europe/Berlin",
    "UTC+03:00": "Europe/Moscow",
    "UTC+04:00": "Asia/Dubai",
}

STATUS_LABELS = {
    BillStatus.UNPAID: "Unpaid",
    BillStatus.PAID: "Paid",
    BillStatus.OVERDUE: "Overdue",
    BillStatus.PENDING: "Pending",
}

BUCKET_LABELS = {
    Bucket.PAID: "Paid",
    Bucket.OVERDUE: "Overdue",
    Bucket.REMINDER_DUE: "Reminder",
    Bucket.UPCOMING: "Upcoming",
    Bucket.SCHEDULED: "Scheduled",
}
