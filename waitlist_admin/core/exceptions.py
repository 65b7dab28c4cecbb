

class WaitlistAdminError(Exception):
    """Base exception for all waitlist_admin errors"""
    pass

class ConfigError(WaitlistAdminError):
    """Invalid or inconsistent global.json or environment overrides"""
    pass

class BackendError(WaitlistAdminError):
    """
    The applicant backend could not be read
    connection refused, non-2xx response, malformed payload, etc
    """
    pass

class UnknownStageError(WaitlistAdminError, ValueError):
    """A stage value that does not resolve to one of the canonical stage tokens"""
    pass
