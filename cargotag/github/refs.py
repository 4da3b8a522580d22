"""Git references API lookups.

Pure functions over an HttpClient, so the remote existence check can be
tested without the network.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from cargotag.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from cargotag.github.http import HttpClient, HttpError

__all__ = ["tag_ref_url", "tag_ref_exists"]


def tag_ref_url(api_url: str, repository: str, tag: str) -> str:
    """Build the single-ref endpoint URL for a tag.

    Example:
        >>> tag_ref_url("https://api.github.com", "octo/app", "v1.0.0")
        'https://api.github.com/repos/octo/app/git/ref/tags/v1.0.0'
    """
    return f"{api_url}/repos/{repository}/git/ref/tags/{quote(tag, safe='/')}"


def tag_ref_exists(
    http: HttpClient,
    *,
    api_url: str,
    repository: str,
    tag: str,
) -> Result[bool, HttpError]:
    """Ask the refs API whether `refs/tags/<tag>` exists.

    Only the status matters: the response body is never parsed.

    Returns:
        Ok(False) on 404, Ok(True) on any successful response, Err for every
        other failure (auth, rate limiting, server or network errors).
    """
    result = http.get_status(tag_ref_url(api_url, repository, tag))
    if isinstance(result, Err):
        if result.error.status == 404:
            return Ok(False)
        return result
    return Ok(True)
