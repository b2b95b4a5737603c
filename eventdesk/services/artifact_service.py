import logging

from eventdesk.storage.object_store import ObjectStore, StorageError
from eventdesk.utils.qr_generator import encode_qr_png

logger = logging.getLogger(__name__)

ARTIFACT_CONTENT_TYPE = "image/png"


class ArtifactService:
    """Encodes ticket codes as QR images and stores them."""

    def __init__(self, object_store: ObjectStore):
        self.object_store = object_store

    @staticmethod
    def key_for(code_payload: str) -> str:
        return f"qr/{code_payload}.png"

    def store_artifact(self, code_payload: str) -> str:
        """
        Render and upload the artifact for one ticket code.

        Raises:
            StorageError: If rendering or upload failed. Callers treat this
                as a failure of this one ticket only.
        """
        key = self.key_for(code_payload)
        try:
            artifact = encode_qr_png(code_payload)
        except Exception as e:
            raise StorageError(key, f"QR encoding failed: {str(e)}") from e

        return self.object_store.put(key, artifact, ARTIFACT_CONTENT_TYPE)
