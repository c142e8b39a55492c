import logging

from app.services.account_store import AccountStore
from app.services.file_storage import FileStorage, IncomingFile
from app.utils.errors import NotFound, StoreError

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, store: AccountStore, storage: FileStorage):
        self.store = store
        self.storage = storage

    def update_photo(self, account_id: int, upload: IncomingFile | None) -> str | None:
        """Point the account at a newly stored photo; without an upload, change nothing."""
        account = self.store.find_by_id(account_id)
        if account is None:
            raise NotFound()
        if upload is None:
            return account.profile_photo

        reference = self.storage.save(upload)
        try:
            account = self.store.update_fields(account_id, {"profile_photo": reference})
        except (NotFound, StoreError):
            self.storage.delete(reference)
            raise
        logger.info("Updated profile photo for account id=%s", account_id)
        return account.profile_photo
