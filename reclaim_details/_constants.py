"""Common literal values used across reclaim_details.

These constants keep the tab vocabulary, compatibility fallbacks, and asset
filenames centralized so the parser, assembler, asset discovery, and tests can
import the same values without drifting. Intended for internal use within the
reclaim_details package.

Examples
--------
>>> from reclaim_details import _constants
>>> _constants.TAB_KEYS[0]
'description'
>>> _constants.SCREENSHOT_EXTENSIONS
('png', 'jpg', 'jpeg', 'gif')
"""

TAB_KEYS: tuple[str, ...] = (
    "description",
    "installation",
    "faq",
    "screenshots",
    "changelog",
    "reviews",
    "other_notes",
)

DEFAULT_REQUIRES = "5.0"
DEFAULT_TESTED = "6.8"
DEFAULT_REQUIRES_PHP = "7.4"

README_FILENAME = "readme.txt"
ASSETS_DIRNAME = "assets"
SCREENSHOT_EXTENSIONS: tuple[str, ...] = ("png", "jpg", "jpeg", "gif")
RASTER_EXTENSIONS: tuple[str, ...] = ("png", "jpg")
BANNER_STEMS: dict[str, str] = {
    "high": "banner-1544x500",
    "low": "banner-772x250",
}
ICON_STEMS: dict[str, str] = {
    "2x": "icon-256x256",
    "1x": "icon-128x128",
}
ICON_SVG_FILENAME = "icon.svg"

PLUGIN_INFORMATION_ACTION = "plugin_information"
DETAILS_MODAL_WIDTH = 772
DETAILS_MODAL_HEIGHT = 550
