from typing import Annotated
from fastapi import Depends
from app.modules.auth.utils import get_current_user
from app.modules.auth.schemas import AuthContext

user_dependency = Annotated[AuthContext, Depends(get_current_user)]
