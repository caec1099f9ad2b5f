"""
Message template utilities.

Issue bodies and notification emails are rendered from text templates
packaged with the Lambda under templates/. Templates are read on every
call; nothing is cached between invocations.
"""

import html
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# src/services/templates.py -> src/templates/
# In Lambda: /var/task/templates/
TEMPLATES_DIR = Path(__file__).parent.parent / 'templates'

GITHUB_ISSUE_TEMPLATE = 'github_issue.md'
CONTACT_EMAIL_TEMPLATE = 'contact_email.html'


def load_template(template_name: str) -> str:
    """
    Load a template from the packaged templates directory.

    Args:
        template_name: File name (e.g., "github_issue.md")

    Returns:
        str: Template content

    Raises:
        ValueError: If the template does not exist
    """
    template_path = TEMPLATES_DIR / template_name

    try:
        with open(template_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        logger.error(f"Template not found: {template_path}")
        raise ValueError(f"Template '{template_name}' not found")

    return content


def format_template(template: str, **variables) -> str:
    """
    Format a template with variables.

    Substituted values are not re-parsed by str.format, so a message
    containing "{name}" is rendered literally.

    Args:
        template: Template string with {variable} placeholders
        **variables: Values to substitute

    Returns:
        str: Rendered template

    Raises:
        ValueError: If the template references a variable that was not supplied

    Example:
        >>> format_template("Hi {name}", name="{email}")
        'Hi {email}'
    """
    try:
        return template.format(**variables)
    except KeyError as e:
        missing_var = str(e).strip("'")
        logger.error(f"Missing variable in template: {missing_var}")
        raise ValueError(f"Missing required variable in template: {missing_var}")


def render_issue_body(name: str, email: str, message: str, timestamp: str) -> str:
    """Render the markdown body of an inquiry issue."""
    return format_template(
        load_template(GITHUB_ISSUE_TEMPLATE),
        name=name,
        email=email,
        message=message,
        timestamp=timestamp
    )


def render_email_html(name: str, email: str, message: str, timestamp: str, site_name: str) -> str:
    """Render the HTML notification email. Field values are HTML-escaped."""
    return format_template(
        load_template(CONTACT_EMAIL_TEMPLATE),
        name=html.escape(name),
        email=html.escape(email),
        message=html.escape(message),
        timestamp=timestamp,
        site_name=html.escape(site_name)
    ).strip()
