from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.chat_user import ChatProfileResponse
from app.services.chat_profile_service import ChatProfileService
from app.services.file_storage import FileStorage, IncomingFile, get_file_storage
from app.utils.response import create_response, handle_exception

router = APIRouter(prefix="/auth", tags=["Chat Users"])


@router.post("/save-user-data")
async def save_user_data(
    name: str | None = Form(None),
    qualification: str | None = Form(None),
    phone: str | None = Form(None),
    dob: str | None = Form(None),
    about: str | None = Form(None),
    skills: str | None = Form(None),
    profilePhoto: str | None = Form(None),
    document: UploadFile | None = File(None),
    storage: FileStorage = Depends(get_file_storage),
    db: Session = Depends(get_db),
):
    try:
        payload = {
            "name": name,
            "qualification": qualification,
            "phone": phone,
            "dob": dob,
            "about": about,
            "skills": skills,
            "profile_photo": profilePhoto,
        }
        upload = None
        if document is not None and document.filename:
            upload = IncomingFile(
                filename=document.filename,
                contents=await document.read(),
                content_type=document.content_type,
            )

        chat_profiles = ChatProfileService(db, storage)
        profile = await run_in_threadpool(chat_profiles.upsert, payload, upload)
        return create_response(
            message="User data saved successfully",
            data={"chatUser": ChatProfileResponse.model_validate(profile).model_dump()},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
