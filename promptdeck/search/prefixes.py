"""
Prefix vocabulary - The closed set of categories a query can be scoped to.

Users scope a query by writing "<prefix>:" anywhere in it:
  template:       → Prompt templates
  vault:          → Saved vault entries
  initial-prompt: → Initial prompts
  refined-prompt: → Refined prompts
  content:        → Generated content

The order here is the display order for result groups and for the
advanced panel checkboxes.
"""

PREFIXES = (
    "template",
    "vault",
    "initial-prompt",
    "refined-prompt",
    "content",
)

TEMPLATE = "template"


def prefix_token(prefix: str) -> str:
    """Return the token a user types to scope a query, e.g. "vault:"."""
    return f"{prefix}:"


def category_title(prefix: str) -> str:
    """
    Human-readable group header for a category.

    Only the first hyphen becomes a space, then each word is capitalised:
    "initial-prompt" → "Initial Prompt".
    """
    return prefix.replace("-", " ", 1).title()
