"""Plugin category detection."""

from lhreport.plugins.detector import PLUGIN_CATEGORY_PREFIX, is_plugin_category

__all__ = ["PLUGIN_CATEGORY_PREFIX", "is_plugin_category"]
