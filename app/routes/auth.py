"""Authentication routes for user registration and login."""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.dependencies import AuthServiceDep
from app.schemas.auth import AuthResponse, LoginRequest
from app.schemas.user import UserCreate

router = APIRouter(prefix="/api/auth", tags=["🔐 Auth"])

AUTH_EXAMPLE = {
    "status": "success",
    "data": {
        "user": {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "createdAt": "2025-01-01T00:00:00.000Z",
        },
        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    },
}


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account and receive a bearer token.",
    responses={
        201: {"content": {"application/json": {"example": AUTH_EXAMPLE}}},
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "status": "fail",
                        "message": "String should have at least 6 characters",
                        "errors": [
                            {
                                "field": "password",
                                "message": "String should have at least 6 characters",
                                "type": "string_too_short",
                            },
                        ],
                    },
                },
            },
        },
        409: {
            "description": "Conflict",
            "content": {
                "application/json": {
                    "example": {"status": "fail", "message": "Email already registered"},
                },
            },
        },
    },
    operation_id="auth_register",
)
async def register(user: UserCreate, auth_service: AuthServiceDep) -> AuthResponse:
    """
    Register a new user.

    Parameters
    ----------
    user : UserCreate
        Name, email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthResponse
        The public user fields and a bearer token.

    Raises
    ------
    ConflictError
        If the email is already registered.

    Examples
    --------
    Request
        POST /api/auth/register
        {"name": "Ada Lovelace", "email": "ada@example.com", "password": "s3cret!"}
    Response
        201 Created
        {"status": "success", "data": {"user": { ... }, "token": "eyJ..."}}
    """
    data = await auth_service.register(
        name=user.name,
        email=str(user.email),
        password=user.password.get_secret_value(),
    )
    return AuthResponse(data=data)


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Login",
    description="Exchange an email and password for a bearer token.",
    responses={
        200: {"content": {"application/json": {"example": AUTH_EXAMPLE}}},
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {
                    "example": {"status": "fail", "message": "Invalid email or password"},
                },
            },
        },
    },
    operation_id="auth_login",
)
async def login(credentials: LoginRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """
    Login with email and password.

    Parameters
    ----------
    credentials : LoginRequest
        Email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthResponse
        The public user fields and a bearer token.

    Raises
    ------
    AuthenticationError
        If the email is unknown or the password is wrong.
    """
    data = await auth_service.login(str(credentials.email), credentials.password)
    return AuthResponse(data=data)
