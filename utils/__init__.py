# Utility modules for the costing app
from .sanitizer import sanitize_text, sanitize_allergens
