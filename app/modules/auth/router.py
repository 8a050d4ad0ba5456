from fastapi import APIRouter, status
from app.modules.auth.service import AuthService
from app.modules.auth.schemas import UserCreate, UserLogin, AuthResponse, ProfileOut
from app.dependencies.dbDependecies import db_dependency
from app.dependencies.userDependencies import user_dependency

auth_router = APIRouter()


@auth_router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: db_dependency):
    """
    Register a new user and return its session token.
    """
    return AuthService(db).register(user)


@auth_router.post("/login", response_model=AuthResponse, status_code=status.HTTP_200_OK)
def login(credentials: UserLogin, db: db_dependency):
    """
    Endpoint for user login.
    """
    return AuthService(db).login(credentials)


@auth_router.get("/user/profile", response_model=ProfileOut)
def get_profile(db: db_dependency, current_user: user_dependency):
    """
    Profile of the authenticated user.
    """
    return AuthService(db).get_profile(current_user.user_id)
