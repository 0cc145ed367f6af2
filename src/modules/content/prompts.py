"""Prompt templates for listing and blog auto-populate."""

TITLE_VALIDATION_PROMPT = """\
Decide whether this aircraft listing title identifies the aircraft well enough to research it: "{title}"

A usable title names the year, the make and the model.
If it does, also write an enhanced title with extra searchable detail.

Reply with JSON only:
{{
  "valid": true | false,
  "missing": ["year" | "make" | "model", ...],
  "enhanced_title": "string or null",
  "details": {{"year": "string or null", "make": "string or null", "model": "string or null"}}
}}"""

AIRCRAFT_RESEARCH_PROMPT = """\
Gather what a buyer or seller needs to know about a {title} aircraft offered for sale.

Cover: make and full model name, production years, aircraft category, engine make and model,
seats, empty and maximum takeoff weight, fuel capacity, cruise speed, service ceiling, range,
typical avionics fits for this model year, current market price range in USD, typical airframe
and engine hours for its age, desirable features, common issues, maintenance items and
overhaul intervals, and the regions where the type is commonly based."""

AIRCRAFT_STRUCTURE_PROMPT = """\
Turn the research below into a listing draft.

Research:
{research}

Reply with JSON only, using exactly these keys:
{{
  "make": "string",
  "model": "string",
  "year": number,
  "title": "descriptive listing title",
  "description": "several paragraphs suitable for a listing page",
  "price": number (estimated USD market price),
  "hours": number (typical total time for this age),
  "engine_type": "engine make and model",
  "avionics": "typical avionics package",
  "location": {{"airport_code": "string", "city": "string", "country": "string"}},
  "specifications": {{
    "category": "string", "seats": number, "empty_weight": number,
    "max_takeoff_weight": number, "fuel_capacity": number, "cruise_speed": number,
    "service_ceiling": number, "range": number
  }},
  "market_info": {{
    "price_range": {{"min": number, "max": number}},
    "desirable_features": ["string"], "common_issues": ["string"], "maintenance_notes": ["string"]
  }},
  "meta_description": "under 160 characters",
  "url_slug": "lowercase-hyphenated, under 100 characters"
}}

Use realistic figures for this make, model and year."""

BLOG_RESEARCH_PROMPT = """\
Research "{topic}" for an article on ZuluNiner, an aircraft marketplace and aviation community.

Readers are owners, buyers, sellers and pilots. Collect recent developments, technical detail,
market context, safety and regulatory notes, and practical advice they can act on."""

BLOG_STRUCTURE_PROMPT = """\
Write a blog post for ZuluNiner from the research below.

Original topic: "{topic}"

Research:
{research}

Reply with JSON only, using exactly these keys:
{{
  "title": "SEO-friendly title",
  "slug": "lowercase-hyphenated, under 100 characters",
  "blurb": "two or three sentence hook, 150-200 characters",
  "content": "the full post in Markdown, 1500-2500 words, ## headings, lists where useful",
  "meta_description": "under 160 characters",
  "header_photo": null,
  "topics": ["3-5 topic tags"],
  "keywords": ["5-8 SEO keywords"]
}}

Write in the first person plural, in an authoritative, dryly funny voice.
Use hyphens, never em-dashes. End with concrete next steps for the reader."""
