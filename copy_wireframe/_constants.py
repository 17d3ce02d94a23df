"""Common literal values used across copy_wireframe.

Fallback copy for synthesized sections, default template keys, and CLI
environment settings live here so that the resolver, selector, and tests can
import the same values without drifting.

Examples
--------
>>> from copy_wireframe import _constants
>>> _constants.SECTION_ID_TEMPLATE.format(index=3, type="cta")
'section-3-cta'
>>> _constants.DEFAULT_TEMPLATE_KEY
'text_block'
"""

SECTION_ID_TEMPLATE = "section-{index}-{type}"

DEFAULT_TEMPLATE_KEY = "text_block"
BULLET_LIST_TEMPLATE_KEY = "bullet_list"
ICON_GRID_TEMPLATE_KEY = "features_grid"

FALLBACK_HERO_HEADLINE = "Welcome"
FALLBACK_HERO_DESCRIPTION = "Discover what we can do for you."
FALLBACK_CTA_HEADLINE = "Ready to get started?"
FALLBACK_CTA_DESCRIPTION = "Take the next step today."
FALLBACK_CTA_BUTTON = "Get Started"

ENV_PREFIX = "WIREFRAME_"
DEFAULT_CONFIG_FILENAME = "wireframe.yaml"
