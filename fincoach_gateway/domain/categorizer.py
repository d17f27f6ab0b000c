"""Keyword-based transaction categorization"""

from typing import Iterable, List, Optional, Tuple
from fincoach_gateway.domain.models import Category, Transaction

# Match order is list order: the first category with a keyword contained in the
# description wins. "insurance" and "maintenance" resolve to Housing, and
# "investment income" resolves to Savings, because of this ordering.
CATEGORY_KEYWORDS: List[Tuple[Category, Tuple[str, ...]]] = [
    (Category.HOUSING, ("rent", "mortgage", "utilities", "insurance", "property tax", "maintenance")),
    (
        Category.TRANSPORTATION,
        ("gas", "car payment", "insurance", "maintenance", "uber", "lyft", "taxi", "public transport"),
    ),
    (Category.FOOD, ("grocery", "restaurant", "fast food", "coffee", "dining", "takeout")),
    (Category.HEALTHCARE, ("doctor", "pharmacy", "hospital", "dental", "vision", "medical")),
    (Category.ENTERTAINMENT, ("movie", "streaming", "games", "concert", "sports", "hobby")),
    (Category.SHOPPING, ("clothing", "electronics", "home goods", "personal care", "gifts")),
    (Category.EDUCATION, ("tuition", "books", "courses", "training", "certification")),
    (Category.SAVINGS, ("savings account", "investment", "401k", "ira", "emergency fund")),
    (Category.DEBT, ("credit card", "loan payment", "student loan", "personal loan")),
    (Category.INCOME, ("salary", "bonus", "freelance", "investment income", "rental income")),
    (Category.OTHER, ()),
]


def categorize(description: Optional[str]) -> Category:
    """
    Resolve a free-text description to exactly one category.

    Matching is a case-insensitive substring test against each category's
    keywords, in CATEGORY_KEYWORDS order. Anything unmatched, including an
    empty or missing description, falls back to Other.
    """
    text = (description or "").lower()
    if not text:
        return Category.OTHER

    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category

    return Category.OTHER


def categorize_transactions(transactions: Iterable[Transaction]) -> List[Tuple[Transaction, Category]]:
    """Pair each transaction with its resolved category, preserving input order"""
    return [(txn, categorize(txn.description)) for txn in transactions]
