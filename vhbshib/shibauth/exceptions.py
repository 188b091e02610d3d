class ShibAuthError(Exception):
    """Base of the errors that abort a federated login"""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ConfigAmbiguity(ShibAuthError):
    """An attribute holds several values but resolving the aggregation is disabled"""

    def __init__(self, field, values):
        super().__init__(
            f'The attribute for "{field}" contains {len(values)} values. '
            'Please contact the support of your institution.'
        )
        self.field = field
        self.values = values


class AccessDenied(ShibAuthError):
    """The entitlements do not allow the user to access the platform"""
