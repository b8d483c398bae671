"""
User CRUD controller. Passwords are hashed before they reach the store.
"""
from typing import Any, Dict

from ..common.crud import CrudController
from ..common.security import hash_password
from .config import settings
from .models import User
from .schemas import UserCreate, UserUpdate


def prepare_user(values: Dict[str, Any]) -> Dict[str, Any]:
    if "password" in values:
        values = {**values, "password": hash_password(values["password"])}
    return values


user_controller = CrudController(
    User,
    resource="user",
    collection="users",
    create_schema=UserCreate,
    update_schema=UserUpdate,
    unique_field="email",
    serialize=User.to_dict,
    prepare=prepare_user,
    partial_update=True,
    max_limit=settings.MAX_PAGE_LIMIT,
)
