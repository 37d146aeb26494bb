from .certificate_window import CertificateWindow, get_certificate_window

__all__ = ["CertificateWindow", "get_certificate_window"]
