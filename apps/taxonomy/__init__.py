"""
Emoji Taxonomy: GitHub emoji shortcodes by Unicode category

Reconciles GitHub's emoji API (shortcode -> image) with the Unicode full emoji
list into category -> subcategory -> groups of equivalent shortcodes.
"""

__version__ = "1.0.0"
