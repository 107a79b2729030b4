"""Registration and login."""
from fastapi import APIRouter, Depends, HTTPException, status

from codemart.core.security import create_access_token, get_current_user
from codemart.interfaces.http.deps import get_user_service
from codemart.modules.users import Role, User, UserCreateInput, UserService
from codemart.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse

router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    token = create_access_token(user.id, user.role.value)
    return AuthResponse(token=token, user=UserResponse.from_domain(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, summary="Create an account")
async def register(payload: RegisterRequest, service: UserService = Depends(get_user_service)) -> AuthResponse:
    role = Role.SELLER if payload.role == Role.SELLER.value else Role.BUYER
    user = await service.register(
        UserCreateInput(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=role,
        )
    )
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse, summary="Exchange credentials for a bearer token")
async def login(payload: LoginRequest, service: UserService = Depends(get_user_service)) -> AuthResponse:
    user = await service.authenticate(payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return _auth_response(user)


@router.get("/me", response_model=UserResponse, summary="Resolve the bearer token to a user")
async def me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_domain(user)
