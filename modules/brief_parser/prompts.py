"""
Prompts for extracting a structured brief from a job description.
"""

PARSER_SYSTEM_PROMPT = """You extract recruiting fields from raw job descriptions.

Return JSON with keys:
title, location, seniority, employment_type, salary (string or null),
remote (On-site/Hybrid/Remote), team (or null), impact (<=140 chars),
top_responsibilities (<=3 items), requirements (<=3 items),
benefits (<=3 items), cta_url (string or null).

Be concise, no extra keys, US English, no personally identifiable data."""


def build_parser_prompt(job_description: str, locale: str = "en-US") -> str:
    return f"Extract structured data from this job description in {locale} locale:\n\n{job_description}"
