from .keywords import extract_job_keywords, match_keywords

__all__ = ["extract_job_keywords", "match_keywords"]
