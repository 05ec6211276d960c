"""Exception hierarchy shared by the loader and the renderer."""


class CertInfoError(Exception):
    """Base exception for certinfo errors."""
    pass


class RenderError(CertInfoError):
    """A mandatory field is missing or has a shape that cannot be rendered."""
    pass


class BadCertError(CertInfoError):
    """Certificate or request could not be loaded."""
    pass
