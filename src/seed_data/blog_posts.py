"""Seed data for blog posts."""

BLOG_POSTS = [
    {
        "slug": "pre-buy-inspection-checklist",
        "title": "The Pre-Buy Inspection Checklist We Wish We Had",
        "blurb": "What to look at before you hand over the cashier's check.",
        "content": "## Logbooks first\n\nStart with the paperwork. Then the airplane.\n",
        "meta_description": "A practical pre-buy inspection checklist for used aircraft buyers.",
        "published": True,
    },
]
