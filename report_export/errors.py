"""Exceptions raised while exporting reports."""


class ExportError(Exception):
    """Base class for report export failures."""


class RenderingBackendError(ExportError):
    """Text could not be measured or drawn by the rendering backend."""


class DownloadDeliveryError(ExportError):
    """Generated bytes could not be saved anywhere."""
