from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.user import ProfileResponse
from app.services.account_service import AccountService
from app.services.account_store import AccountStore
from app.services.auth_middleware import (
    get_account_service,
    get_bearer_token,
    get_token_service,
    resolve_account_id,
)
from app.services.file_storage import FileStorage, IncomingFile, get_file_storage
from app.services.profile_service import ProfileService
from app.services.token_service import TokenService
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/auth", tags=["Profile"])


@router.get("/profile")
def get_profile(
    token: str | None = Depends(get_bearer_token),
    tokens: TokenService = Depends(get_token_service),
    accounts: AccountService = Depends(get_account_service),
):
    try:
        account_id = resolve_account_id(token, tokens)
        account = accounts.fetch_profile(account_id)

        profile_payload = ProfileResponse.model_validate(account).to_payload()
        return create_response(data=profile_payload, status_code=status.HTTP_200_OK)
    except Exception as exc:
        return handle_exception(exc)


@router.post("/upload-photo")
@router.post("/update-profile-photo")
async def upload_profile_photo(
    profilePhoto: UploadFile | None = File(None),
    token: str | None = Depends(get_bearer_token),
    tokens: TokenService = Depends(get_token_service),
    storage: FileStorage = Depends(get_file_storage),
    db: Session = Depends(get_db),
):
    try:
        account_id = resolve_account_id(token, tokens)

        upload = None
        if profilePhoto is not None and profilePhoto.filename:
            upload = IncomingFile(
                filename=profilePhoto.filename,
                contents=await profilePhoto.read(),
                content_type=profilePhoto.content_type,
            )

        profiles = ProfileService(AccountStore(db), storage)
        reference = await run_in_threadpool(profiles.update_photo, account_id, upload)
        return create_response(
            message="Profile photo updated successfully",
            data={"profilePhoto": reference},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
