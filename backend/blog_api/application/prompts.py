"""Prompt templates for technical blog article generation."""


def build_article_prompt(title: str, details: str | None = None) -> str:
    """Prompt for one entry of a batch: the caller supplies the title."""
    details_line = f"Additional details: {details}" if details else ""
    return f"""
Write a comprehensive technical blog article about: "{title}"
{details_line}

Requirements:
- Write 800-1200 words
- Include practical examples and code snippets where relevant
- Use clear headings and structure
- Make it engaging for developers
- Include key takeaways at the end

Format the article in markdown.
""".strip()


def build_single_prompt(prompt: str) -> str:
    """Prompt for free-form generation; the model chooses the title heading."""
    return f"""
{prompt}

Write this as a technical blog article with 800-1200 words.
Include code examples if relevant.
Format in markdown with proper headings.
""".strip()
