__all__ = ["DomainError"]


class DomainError(ValueError):
    """Raised when a numeric kernel is called outside of its valid domain

    For example, evaluating the stellar intensity profile at a radius beyond the
    limb, or integrating over bounds that are out of order. These checks are only
    applied to concrete inputs at the public entry points; traced code clamps
    instead.
    """
