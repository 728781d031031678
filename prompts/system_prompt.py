"""Prompts used by the claim-suggestion pipeline.

The model is asked for **JSON only**; the extractor still recovers JSON from
prose or fenced output because models do not always comply.
"""

# ── Shared preamble ────────────────────────────────────────────────────

_CORE_RULES = """
CORE RULES:
- Only propose claims that are stated in the article context; never invent facts, figures or URLs.
- Keep each claim to one concise, checkable sentence.
- If the context does not let you judge a claim, use the verdict "unverifiable".
"""

# ── Claim suggestion ──────────────────────────────────────────────────

CLAIM_SUGGESTION_PROMPT = f"""
You extract concise factual claims from news content and label each claim with a verdict.

{_CORE_RULES}

TASK — CLAIM SUGGESTION
From the article context, propose 2-3 concise factual claims a moderator should check.
Allowed verdicts: "supported", "partial", "not_supported", "unverifiable".
Set "evidence_url" to a URL from the context that backs the claim, or "".

Respond with JSON only, no prose and no markdown:
{{
  "suggestions": [
    {{"claim_text": "...", "verdict": "unverifiable", "evidence_url": ""}}
  ]
}}
"""

ARTICLE_CONTEXT_TEMPLATE = """Outlet: {outlet}
Headline: {headline}
URL: {url}
Summary: {summary}"""
