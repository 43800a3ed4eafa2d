"""sigv4-render - template rendering and signing preparation for AWS SigV4 requests.

Renders {{ }} placeholders in request parameters, then hands the rendered
request to a signing collaborator and merges the signed headers back.
"""

from sigv4_render.signing import SigV4Plugin
from sigv4_render.template import TemplateContext, TemplateEngine, render

__version__ = "1.0.0"
__all__ = ["__version__", "SigV4Plugin", "TemplateContext", "TemplateEngine", "render"]
