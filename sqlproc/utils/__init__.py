from sqlproc.utils.logging import StructuredFormatter, call_fields, configure_logging, get_logger

__all__ = ("StructuredFormatter", "call_fields", "configure_logging", "get_logger")
