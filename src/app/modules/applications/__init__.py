"""
Applications Module

Program application intake and review:
1. Draft creation with document uploads and duplicate detection
2. Field-by-field editing of drafts
3. Submission with requirement checks and yearly application numbers
4. Admin status changes with an append-only history
5. Deletion with best-effort file cleanup

API Endpoints (public):
- POST /applications - Create draft
- GET /applications/{id} - Get application
- GET /applications/number/{number} - Get by application number
- GET /applications/user/{email} - Applications for an e-mail
- PUT /applications/{id} - Partial update
- PUT /applications/{id}/submit - Submit

API Endpoints (admin):
- GET /applications - List with filters
- GET /applications/statistics - Counts by status
- GET /applications/status/{status} - By status
- GET /applications/program/{program} - By program
- POST /applications/{id}/status - Change status
- DELETE /applications/{id} - Delete
"""

from .admin_router import router as admin_router
from .router import router

__all__ = ["router", "admin_router"]
