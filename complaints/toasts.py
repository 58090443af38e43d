from flask import flash

# Flash categories the base template knows how to style
VARIANTS = {"success": "success", "destructive": "danger", "warning": "warning", "info": "info"}


def toast(title, description=None, variant="success"):
    """Queue a non-blocking message for the next rendered page."""
    message = f"{title}: {description}" if description else title
    flash(message, VARIANTS.get(variant, "info"))
