from pydantic import BaseModel


class UploadParams(BaseModel):
    """What the browser needs to post a file straight to Cloudinary."""

    upload_url: str
    cloud_name: str
    upload_preset: str | None = None
    api_key: str | None = None
    timestamp: int | None = None
    folder: str | None = None
    signature: str | None = None
