# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check and banner endpoints
# - projects.py: Project CRUD (inline and upload variants)
# - clients.py: Client testimonial CRUD (inline and upload variants)
# - contacts.py: Contact lead CRUD
# - contact_form.py: Public contact form
# - subscribers.py: Newsletter subscriber CRUD
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import projects
from . import clients
from . import contacts
from . import contact_form
from . import subscribers

__all__ = [
    "health",
    "projects",
    "clients",
    "contacts",
    "contact_form",
    "subscribers",
]
