from fastapi import APIRouter, Depends, status

from app.schemas.user import LoginRequest, SignupRequest
from app.services.account_service import AccountService
from app.services.auth_middleware import get_account_service
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/auth", tags=["Auth"])


# Plain def handlers run in the threadpool, so bcrypt stays off the event loop
@router.post("/signup")
def signup(body: SignupRequest, accounts: AccountService = Depends(get_account_service)):
    try:
        _, token = accounts.register(body.model_dump())
        return create_response(
            message="User registered successfully",
            data={"token": token},
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.post("/login")
def login(body: LoginRequest, accounts: AccountService = Depends(get_account_service)):
    try:
        token = accounts.login(body.email, body.password)
        return create_response(
            message="Login successful",
            data={"token": token},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
