"""Error handling policy helpers.

Provides consistent error raising and warning patterns across the codebase.
"""

from loguru import logger


class ValidationError(ValueError):
    """Raised when map metadata or a shape definition is malformed."""


def raise_fatal_with_remedy(msg: str, remedy: str) -> None:
    """Raise a RuntimeError with an actionable remediation message.

    Parameters
    ----------
    msg : str
        Primary error description
    remedy : str
        Concrete steps to fix the issue
    """
    full_msg = f"{msg}\n\nRemediation: {remedy}"
    raise RuntimeError(full_msg)


def warn_soft_degrade(component: str, issue: str, fallback: str) -> None:
    """Log a warning for recoverable input problems with soft degradation.

    Parameters
    ----------
    component : str
        Name of the affected component or scene object
    issue : str
        Description of what is wrong
    fallback : str
        What behavior will occur instead
    """
    logger.warning(
        "Component '{}' issue: {}. Fallback: {}",
        component,
        issue,
        fallback,
    )
