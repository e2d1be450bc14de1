from supabase import Client
from app.config import settings
import logging

logger = logging.getLogger(__name__)


class CommunityImageStorage:
    def __init__(self, supabase: Client, bucket_name: str = None):
        self.bucket_name = bucket_name or settings.community_images_bucket
        self.bucket = supabase.storage.from_(self.bucket_name)

    def upload_file(self, file_content: bytes, key: str, content_type: str) -> str:
        """Upload an image to the bucket and return its public URL"""
        try:
            self.bucket.upload(key, file_content, {"content-type": content_type})
        except Exception as e:
            logger.error(f"Failed to upload file to storage: {str(e)}")
            raise
        return self.bucket.get_public_url(key)

    def delete_file(self, key: str) -> bool:
        """Delete an image from the bucket"""
        try:
            self.bucket.remove([key])
            return True
        except Exception as e:
            logger.error(f"Failed to delete file from storage: {str(e)}")
            return False
