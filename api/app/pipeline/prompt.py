"""
Prompt rendering for the phishing judgment request.

The prompt is a single user-role message: analyst role, the JSON schema that
is the only acceptable answer, risk guidance, then the message itself.
Rendering is a pure function of the normalized request.
"""

import json

from ..schemas import NormalizedRequest

# ============================================================================
# Template
# ============================================================================

PROMPT_TEMPLATE = """
You are an enterprise phishing/social-engineering analyst.
Analyze the message for phishing/social engineering risk.

Return ONLY valid JSON in this schema:
{{
  "risk_score": number (0-100),
  "verdict": "safe" | "suspicious" | "likely_phishing",
  "cues": [
    {{ "type": string, "evidence": string, "explanation": string }}
  ],
  "recommended_user_action": string[]
}}

Guidelines:
- Be conservative: if uncertain, mark suspicious not safe.
- Look for urgency, authority impersonation, credential requests, payment changes,
  link mismatch, strange sender domain, abnormal tone, threatening language, fake invoices.

Message:
Subject: {subject}
SenderName: {sender_name}
SenderEmail: {sender_email}
Body: {body_text}
Links: {links}
"""


def serialize_links(links: list) -> str:
    """Compact JSON array, e.g. ["https://a","https://b"] or [null,{"u":1}]."""
    return json.dumps(links, ensure_ascii=False, separators=(",", ":"))


def build_prompt(req: NormalizedRequest) -> str:
    return PROMPT_TEMPLATE.format(
        subject=req.subject,
        sender_name=req.sender_name,
        sender_email=req.sender_email,
        body_text=req.body_text,
        links=serialize_links(req.links),
    )
