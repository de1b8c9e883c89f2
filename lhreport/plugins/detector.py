"""Recognize categories contributed by plugins."""

# Reserved id prefix of plugin-contributed categories
PLUGIN_CATEGORY_PREFIX = "lighthouse-plugin-"


def is_plugin_category(category_id: str) -> bool:
    """Return True if the category id carries the plugin prefix.

    Only the id matters; title and other metadata are ignored.
    """
    return category_id.startswith(PLUGIN_CATEGORY_PREFIX)
