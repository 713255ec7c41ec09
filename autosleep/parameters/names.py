"""Parameter names as they appear in broker requests."""

AUTO_ENROLLMENT = "auto-enrollment"
EXCLUDE_FROM_AUTO_ENROLLMENT = "exclude-from-auto-enrollment"
IDLE_DURATION = "idle-duration"
IGNORE_ROUTE_SERVICE_ERROR = "ignore-route-service-error"
SECRET = "secret"

# Enrollment parameter, used when enrolling an application
STATE = "state"

SERVICE_INSTANCE_PARAMETERS = (
    AUTO_ENROLLMENT,
    EXCLUDE_FROM_AUTO_ENROLLMENT,
    IDLE_DURATION,
    IGNORE_ROUTE_SERVICE_ERROR,
    SECRET,
)
