import logging
import time

import cloudinary
import cloudinary.utils

from app.config import Config
from app.errors import ErrorType
from app.exceptions import AppException

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


class ImageService:
    """Hands the browser what it needs to upload straight to Cloudinary.

    Signed uploads are used when API credentials are configured, otherwise an
    unsigned upload preset.
    """

    def __init__(self):
        self.cloud_name = Config.CLOUDINARY_CLOUD_NAME
        self.upload_preset = Config.CLOUDINARY_UPLOAD_PRESET
        self.api_key = Config.CLOUDINARY_API_KEY
        self.api_secret = Config.CLOUDINARY_API_SECRET
        self.folder = Config.CLOUDINARY_FOLDER

        if self.signed:
            cloudinary.config(
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                secure=True
            )

    @property
    def signed(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def can_upload(self) -> bool:
        return self.signed or bool(self.cloud_name and self.upload_preset)

    def upload_url(self) -> str:
        return UPLOAD_URL.format(cloud_name=self.cloud_name)

    def upload_params(self) -> dict:
        """Parameters for a direct browser upload.

        Raises:
            AppException: When no image host is configured.
        """
        if not self.can_upload():
            raise AppException(ErrorType.NOT_CONFIGURED, "Image uploads are not configured")

        if not self.signed:
            return {
                "upload_url": self.upload_url(),
                "cloud_name": self.cloud_name,
                "upload_preset": self.upload_preset,
            }

        params = {"timestamp": int(time.time())}
        if self.folder:
            params["folder"] = self.folder
        signature = cloudinary.utils.api_sign_request(params, self.api_secret)
        logger.info(f"Signed upload request for folder '{self.folder}'")
        return {
            "upload_url": self.upload_url(),
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "signature": signature,
            **params,
        }


image_service = ImageService()
