"""
Rule-based extraction of structured facts from user messages.

Every table is an ordered list of (tag, keywords) pairs matched by substring
against the lower-cased message. Order matters: first match wins for the
category, target market and intent lookups.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from enum import Enum


class UserIntent(str, Enum):
    """What the user is asking for in one message"""
    ASK_COMPETITOR = "ask_competitor"
    ASK_MARKET = "ask_market"
    ASK_CUSTOMER = "ask_customer"
    ASK_REPORT = "ask_report"
    GENERAL = "general"


KeywordTable = Sequence[Tuple[str, Sequence[str]]]

IDEA_INDICATORS = (
    "我想做",
    "我要做",
    "我打算做",
    "建立一个",
    "创建一个",
    "开发一个",
    "i want to build",
    "i'm building",
    "i'm thinking about",
    "我在考虑",
)

CATEGORY_KEYWORDS: KeywordTable = (
    ("Developer Tools", ("代码", "开发", "code", "developer", "programming")),
    ("SaaS", ("saas", "平台", "platform", "software")),
    ("E-commerce", ("电商", "电子商务", "ecommerce", "marketplace", "商城")),
    ("FinTech", ("金融", "支付", "fintech", "payment", "banking")),
    ("HealthTech", ("健康", "医疗", "health", "medical", "wellness")),
    ("EdTech", ("教育", "学习", "education", "learning", "training")),
    ("AI", ("ai", "人工智能", "机器学习", "machine learning", "智能")),
)

TARGET_MARKET_KEYWORDS: KeywordTable = (
    ("小团队", ("小团队", "small team", "startup")),
    ("企业", ("企业", "enterprise", "大公司")),
    ("个人开发者", ("个人", "开发者", "developer", "programmer")),
    ("SMB", ("smb", "中小企业", "small business")),
)

CONCERN_KEYWORDS: KeywordTable = (
    ("pricing", ("定价", "价格", "pricing", "cost")),
    ("competition", ("竞对", "竞争", "competitor", "competition")),
    ("market", ("市场", "market", "opportunity")),
    ("customer", ("客户", "用户", "customer", "user")),
    ("differentiation", ("差异化", "differentiat", "unique", "优势")),
    ("risks", ("风险", "risk", "challenge", "挑战")),
)

INTENT_KEYWORDS: Sequence[Tuple[UserIntent, Sequence[str]]] = (
    (UserIntent.ASK_COMPETITOR, ("竞对", "竞争对手", "competitor")),
    (UserIntent.ASK_MARKET, ("市场", "market size", "tam", "机会")),
    (UserIntent.ASK_CUSTOMER, ("客户", "用户画像", "customer", "target audience")),
    (UserIntent.ASK_REPORT, ("完整报告", "评估报告", "vc", "full report", "comprehensive")),
)


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _first_match(text: str, table: KeywordTable) -> Optional[str]:
    for tag, keywords in table:
        if _contains_any(text, keywords):
            return tag
    return None


def extract_idea_from_message(message: str) -> Optional[Dict[str, Any]]:
    """
    Extract a partial idea description from a message.

    Returns None unless the message announces an idea; otherwise the whole
    message becomes the description, with category and target market set when
    a keyword matches.
    """
    lower_message = message.lower()

    if not _contains_any(lower_message, IDEA_INDICATORS):
        return None

    extracted: Dict[str, Any] = {"description": message}

    category = _first_match(lower_message, CATEGORY_KEYWORDS)
    if category:
        extracted["category"] = category

    target_market = _first_match(lower_message, TARGET_MARKET_KEYWORDS)
    if target_market:
        extracted["target_market"] = target_market

    return extracted


def extract_user_concerns(message: str) -> List[str]:
    """Return every concern tag whose keywords appear in the message"""
    lower_message = message.lower()
    return [tag for tag, keywords in CONCERN_KEYWORDS if _contains_any(lower_message, keywords)]


def detect_user_intent(message: str) -> UserIntent:
    """Classify a message; the first matching intent group wins"""
    lower_message = message.lower()

    for intent, keywords in INTENT_KEYWORDS:
        if _contains_any(lower_message, keywords):
            return intent

    return UserIntent.GENERAL
