"""
Media resolution: local file lookup and deduplicated uploads to the
Strapi media library.
"""
import mimetypes
import os
from typing import Dict, List, Sequence, Union

import structlog

from .api import StrapiClient
from .exceptions import SeedFileNotFoundError
from .models import FileData, UploadedFile

logger = structlog.get_logger(__name__)

MediaRef = Union[int, List[int]]


def strip_extension(file_name: str) -> str:
    """Drop everything from the first dot: 'cover.final.jpg' -> 'cover'"""
    return file_name.split(".", 1)[0]


def get_file_data(file_name: str, uploads_dir: str) -> FileData:
    """
    Locate a media file on disk and describe it for upload

    Raises:
        SeedFileNotFoundError: If the file does not exist
    """
    file_path = os.path.join(uploads_dir, file_name)
    if not os.path.isfile(file_path):
        raise SeedFileNotFoundError(f"Media file not found: {file_path}")

    mimetype, _ = mimetypes.guess_type(file_name)
    return FileData(
        filepath=file_path,
        original_file_name=file_name,
        size=os.path.getsize(file_path),
        mimetype=mimetype or "",
    )


class MediaLibrary:
    """
    Resolves fixture file names to Strapi media library file ids.

    Each distinct file name is resolved once per run: names already seen are
    served from memory, others are looked up in the media library by name
    and uploaded only when absent.
    """

    def __init__(self, client: StrapiClient, uploads_dir: str):
        self.client = client
        self.uploads_dir = uploads_dir
        self._resolved: Dict[str, UploadedFile] = {}
        self.uploaded: List[str] = []
        self.reused: List[str] = []

    def resolve(self, file_names: Sequence[str]) -> MediaRef:
        """
        Resolve file names to file ids

        Returns:
            A single id when exactly one name was given, otherwise the ids in input order
        """
        files = [self._resolve_one(file_name) for file_name in file_names]
        ids = [f.id for f in files]
        return ids[0] if len(ids) == 1 else ids

    def _resolve_one(self, file_name: str) -> UploadedFile:
        if file_name in self._resolved:
            return self._resolved[file_name]

        name = strip_extension(file_name)
        existing = self.client.find_file(name)
        if existing:
            uploaded = UploadedFile.model_validate(existing)
            self.reused.append(file_name)
            logger.debug("file_reused", file=file_name, id=uploaded.id)
        else:
            uploaded = self._upload(file_name, name)

        self._resolved[file_name] = uploaded
        return uploaded

    def _upload(self, file_name: str, name: str) -> UploadedFile:
        file_data = get_file_data(file_name, self.uploads_dir)
        file_info = {
            "alternativeText": f"An image uploaded to Strapi called {name}",
            "caption": name,
            "name": name,
        }
        created = self.client.upload(file_data, file_info)
        uploaded = UploadedFile.model_validate(created[0])
        self.uploaded.append(file_name)
        logger.info("file_uploaded", file=file_name, id=uploaded.id, size=file_data.size)
        return uploaded
