# app/modules/auth/routes.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from app.modules.auth import schemas, services
from app.modules.auth.services import AuthContext, auth_events, get_auth_context
from app.core.gateway import DataGateway, get_gateway
from app.core.config import settings
import logging

router = APIRouter()

logger = logging.getLogger(__name__)

@router.get("/")
async def auth_root():
    return {"message": "Auth module is working"}


@router.post("/signup", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def signup(user: schemas.UserCreate, gateway: DataGateway = Depends(get_gateway)):
    # Check if email already exists
    if gateway.get_user_by_email(user.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        return services.create_user(gateway, user)
    except SQLAlchemyError as e:
        logger.error(f"Error creating user {user.email}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating user"
        )


@router.post("/login", response_model=schemas.LoginResponse)
def login(login_req: schemas.LoginRequest, gateway: DataGateway = Depends(get_gateway)):
    user = services.authenticate_user(gateway, login_req.email, login_req.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = services.create_access_token(data={"sub": user.email})
    refresh_token = services.create_access_token(
        data={"sub": user.email},
        expires_delta=settings.REFRESH_TOKEN_EXPIRE_MINUTES
    )

    auth_events.publish(services.SIGNED_IN, AuthContext(user_id=str(user.id), email=user.email))

    return schemas.LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer"
    )


@router.get("/me", response_model=schemas.UserResponse)
def me(context: AuthContext = Depends(get_auth_context), gateway: DataGateway = Depends(get_gateway)):
    user = gateway.get_user_by_id(int(context.user_id))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


@router.post("/logout", response_model=schemas.MessageResponse)
def logout(context: AuthContext = Depends(get_auth_context)):
    # Tokens are stateless; the client drops them
    auth_events.publish(services.SIGNED_OUT, context)
    return {"message": "Successfully logged out"}
