from rest_framework import status


class FleetError(Exception):
    """Base class for business-rule and lookup failures raised by the core."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def as_payload(self):
        return {"error": self.message, "code": self.code}


class NotFound(FleetError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class BadInput(FleetError):
    code = "bad_input"


class ValidationFailed(FleetError):
    code = "validation_failed"
    rule = "validation"

    def __init__(self, message, rule=None):
        super().__init__(message)
        if rule is not None:
            self.rule = rule

    def as_payload(self):
        payload = super().as_payload()
        payload["rule"] = self.rule
        return payload


class CapacityExceeded(ValidationFailed):
    code = "capacity_exceeded"
    rule = "capacity"


class ComplianceBlocked(ValidationFailed):
    status_code = status.HTTP_403_FORBIDDEN
    code = "compliance_blocked"
    rule = "license_expired"


class TruckUnavailable(ValidationFailed):
    status_code = status.HTTP_409_CONFLICT
    code = "truck_unavailable"
    rule = "availability"


class OdometerRegression(ValidationFailed):
    code = "odometer_regression"
    rule = "odometer"


class StateConflict(FleetError):
    status_code = status.HTTP_409_CONFLICT
    code = "state_conflict"


class NotAssigned(StateConflict):
    code = "not_assigned"
