"""Auto-populate input rules and output limits."""

import re

# Four-digit year, or a two-digit one such as '78
TITLE_YEAR_PATTERN = re.compile(r"\b(19|20)\d{2}\b|\b\d{2}\b")
MIN_TITLE_WORDS = 3

MIN_TOPIC_WORDS = 2
MAX_TOPIC_LENGTH = 200

BLOG_SLUG_MAX_LENGTH = 100
META_DESCRIPTION_MAX_LENGTH = 160

VALIDATION_TEMPERATURE = 0.0
RESEARCH_TEMPERATURE = 0.4
STRUCTURE_TEMPERATURE = 0.2
