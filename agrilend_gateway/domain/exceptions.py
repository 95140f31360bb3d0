"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RecordsAPIError(DomainException):
    """Records store returned an error or is unavailable"""

    pass


class AssessmentUnavailable(DomainException):
    """Input data for an assessment could not be retrieved; no score was computed"""

    pass


class InvalidScoringInputError(DomainException):
    """Scoring input failed basic type validation"""

    pass


class ApplicationNotFoundError(DomainException):
    """Loan application does not exist"""

    pass


class InvalidDecisionError(DomainException):
    """Officer action is not approve or reject"""

    pass


class DecisionAlreadyRecordedError(DomainException):
    """Loan application already carries a final decision"""

    pass
