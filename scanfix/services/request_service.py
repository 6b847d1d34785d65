from __future__ import annotations

import re

from scanfix.core.errors import SubmissionError
from scanfix.domain.models import LANGUAGES, ScanRequest
from scanfix.domain.schemas import SubmitPayload


class RequestService:
    """
    Local validation and wire encoding of scan requests. Nothing here touches
    the network, so a bad request never costs a round-trip.
    """

    @staticmethod
    def normalize_git_url(url: str) -> str:
        """
        Support both HTTPS and SSH-ish GitHub URLs.
        The backend clones anonymously, so prefer HTTPS.
        """
        u = url.strip()

        # git@github.com:Owner/Repo.git -> https://github.com/Owner/Repo.git
        m = re.match(r"^git@github\.com:(.+)$", u)
        if m:
            return f"https://github.com/{m.group(1)}"

        return u

    @staticmethod
    def validate(request: ScanRequest) -> None:
        repo = request.repository_reference
        code = request.inline_source

        if repo is not None and code is not None:
            raise SubmissionError("Provide either a repository URL or inline code, not both")
        if repo is None and code is None:
            raise SubmissionError("Provide a repository URL or inline code to scan")
        if repo is not None and not repo.strip():
            raise SubmissionError("Repository URL is empty")
        if code is not None and not code.strip():
            raise SubmissionError("Inline code is empty")
        if request.language_hint not in LANGUAGES:
            raise SubmissionError(
                f"Unsupported language '{request.language_hint}'. Supported: {', '.join(LANGUAGES)}"
            )

    @staticmethod
    def to_payload(request: ScanRequest) -> SubmitPayload:
        RequestService.validate(request)
        repo = request.repository_reference
        return SubmitPayload(
            repo_url=RequestService.normalize_git_url(repo) if repo is not None else None,
            code=request.inline_source,
            check_dependencies=request.check_dependencies,
            language=request.language_hint,
        )
