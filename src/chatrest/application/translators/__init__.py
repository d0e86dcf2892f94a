"""Response translators."""

from chatrest.application.translators.permission_overwrite import OverwriteTranslator

__all__ = ["OverwriteTranslator"]
