from fastapi import APIRouter

from app.modules.admins import router as admins_router
from app.modules.applications import admin_router as admin_applications_router
from app.modules.applications import router as applications_router
from app.modules.contacts import router as contacts_router
from app.modules.documents import router as documents_router
from app.modules.events import router as events_router
from app.modules.gallery import router as gallery_router
from app.modules.leaders import router as leaders_router
from app.modules.notifications import router as notifications_router

api_router = APIRouter()

api_router.include_router(admins_router, prefix="/admin", tags=["Admin"])

# Admin routes first: "/statistics" must not be captured by "/{application_id}".
api_router.include_router(
    admin_applications_router,
    prefix="/applications",
    tags=["Admin - Applications"],
)
api_router.include_router(applications_router, prefix="/applications", tags=["Applications"])

api_router.include_router(contacts_router, prefix="/contacts", tags=["Contacts"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(documents_router, prefix="/documents", tags=["Documents"])
api_router.include_router(gallery_router, prefix="/gallery", tags=["Gallery"])
api_router.include_router(leaders_router, prefix="/leaders", tags=["Leaders"])
api_router.include_router(events_router, prefix="/events", tags=["Events"])
