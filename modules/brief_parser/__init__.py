"""
Brief parser module.

Extracts a structured recruiting brief from a raw job description.
"""

from modules.brief_parser.parser import parse_job_description

__all__ = ["parse_job_description"]
