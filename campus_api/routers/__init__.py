from campus_api.resources import RESOURCES
from campus_api.routers.crud import build_crud_router

# One router per declared resource, built from the same generic factory.
resource_routers = [build_crud_router(resource) for resource in RESOURCES]
