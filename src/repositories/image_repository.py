from typing import Optional
from uuid import UUID

from repositories.base import BaseRepository
from repositories.error_handling import handle_repository_errors
from domain.image import Image


class ImageRepository(BaseRepository):
   @handle_repository_errors("fetch image")
   def get(self, image_id: UUID) -> Optional[Image]:
      row = self._fetch_one("SELECT id, contentType, data FROM tbl_image WHERE id = %s", (str(image_id),))
      if not row:
         return None
      return Image(id=UUID(row[0]), content_type=row[1], data=bytes(row[2] or b""))

   @handle_repository_errors("insert image")
   def insert(self, image: Image) -> None:
      self.cursor.execute(
         "INSERT INTO tbl_image (id, contentType, data, dateImport) VALUES (%s, %s, %s, NOW())",
         (str(image.id), image.content_type, image.data),
      )
