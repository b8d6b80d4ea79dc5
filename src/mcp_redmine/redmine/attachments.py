"""Attachment operations for Redmine API.

Attaching a file takes two calls: ``upload_binary`` stores the bytes and
returns a token, then ``add_attachment`` references that token from an issue
update. The client does not chain them.
"""

import logging

from ..models.redmine import RedmineUpload
from .client import RedmineClient
from .constants import OCTET_STREAM_CONTENT_TYPE
from .utils import expect_object, validate_positive_id, with_query

logger = logging.getLogger("mcp-redmine")


class AttachmentsMixin(RedmineClient):
    """Mixin for Redmine attachment operations."""

    def upload_binary(
        self, data: bytes, filename: str | None = None
    ) -> RedmineUpload:
        """
        Upload raw bytes and obtain an upload token.

        Args:
            data: The file content
            filename: Optional file name, forwarded so Redmine can record it

        Returns:
            RedmineUpload carrying the token (and the filename, if given)
        """
        logger.info(f"Uploading {len(data)} bytes to Redmine")
        result = self._request(
            "POST",
            with_query("uploads.json", {"filename": filename}),
            data,
            headers={"Content-Type": OCTET_STREAM_CONTENT_TYPE},
            raw_body=True,
        )
        upload = expect_object(result, "upload", "upload_binary")
        return RedmineUpload.from_api_response(upload, filename=filename)

    def add_attachment(self, issue_id: int, uploads: list[RedmineUpload]) -> None:
        """
        Attach previously uploaded files to an issue.

        Args:
            issue_id: The issue id
            uploads: Upload tokens with their attachment metadata
        """
        validate_positive_id("issue_id", issue_id)
        if not uploads:
            raise ValueError("At least one upload is required to add an attachment")
        payload = [upload.to_attachment_payload() for upload in uploads]
        logger.info(f"Attaching {len(payload)} upload(s) to issue {issue_id}")
        self._request("PUT", f"issues/{issue_id}.json", {"issue": {"uploads": payload}})
