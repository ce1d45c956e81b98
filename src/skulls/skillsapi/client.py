"""HTTP client for the skills.sh directory and GitHub previews."""

import json
import logging
import re

import httpx

from skulls.core.frontmatter import parse_frontmatter
from skulls.core.layout import MANIFEST_FILENAME

from .base import PopularParseError, PreviewUnavailableError, RemoteSkill
from .preview import parse_github_repo, rank_manifest_paths

logger = logging.getLogger(__name__)

_INITIAL_SKILLS = re.compile(
    r'\\+"initialSkills\\+"\s*:\s*\[(.*?)\]\s*,\s*\\+"totalSkills\\+"\s*:',
    re.DOTALL,
)


def parse_initial_skills(html: str) -> list[RemoteSkill]:
    """
    Extract the ``initialSkills`` list embedded in the homepage payload.

    The array sits inside an escaped JSON string, so it's unescaped before
    decoding.

    Raises:
        PopularParseError: If the payload is missing or malformed
    """
    match = _INITIAL_SKILLS.search(html)
    if match is None:
        raise PopularParseError("initialSkills not found")
    try:
        unescaped = json.loads(f'"{match.group(1)}"')
        items = json.loads(f"[{unescaped}]")
    except json.JSONDecodeError as e:
        raise PopularParseError(f"initialSkills payload is malformed: {e}") from e
    return [RemoteSkill.model_validate(item) for item in items]


class SkillsApiClient:
    """Client for searching skills and previewing their manifests."""

    BASE_URL = "https://skills.sh"
    GITHUB_RAW_BASE = "https://raw.githubusercontent.com"
    GITHUB_API_BASE = "https://api.github.com"

    def __init__(
        self,
        base_url: str | None = None,
        github_raw_base: str | None = None,
        github_api_base: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.github_raw_base = (github_raw_base or self.GITHUB_RAW_BASE).rstrip("/")
        self.github_api_base = (github_api_base or self.GITHUB_API_BASE).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport, follow_redirects=True
        )

    async def search(self, query: str, limit: int = 0) -> list[RemoteSkill]:
        """Search the directory.

        Args:
            query: Free-text query
            limit: Maximum number of results (0 lets the server decide)

        Returns:
            Matching skills in server order

        Raises:
            httpx.HTTPError: If the request fails
        """
        params: dict[str, str | int] = {"q": query}
        if limit > 0:
            params["limit"] = limit

        async with self._client() as client:
            response = await client.get(f"{self.base_url}/api/search", params=params)
            response.raise_for_status()
            data = response.json()

        return [RemoteSkill.model_validate(item) for item in data.get("skills") or []]

    async def popular(self, limit: int = 0) -> list[RemoteSkill]:
        """Most-installed skills, scraped from the directory homepage.

        Raises:
            httpx.HTTPError: If the request fails
            PopularParseError: If the page has no skills payload
        """
        async with self._client() as client:
            response = await client.get(self.base_url)
            response.raise_for_status()
            html = response.text

        skills = sorted(parse_initial_skills(html), key=lambda s: s.installs, reverse=True)
        if limit > 0:
            skills = skills[:limit]
        return skills

    async def fetch_skill_markdown(self, skill: RemoteSkill) -> str:
        """
        Fetch a skill's SKILL.md from GitHub, best effort.

        Tries ``skills/<skill_id>/SKILL.md`` first. On a 404, lists the
        repository tree and returns the first ranked candidate whose
        frontmatter name equals the skill id.

        Raises:
            PreviewUnavailableError: If no matching manifest could be fetched
        """
        repo = parse_github_repo(skill.source)
        if repo is None:
            raise PreviewUnavailableError(f"not a GitHub source: {skill.source!r}")
        skill_id = skill.skill_id.strip()
        if not skill_id:
            raise PreviewUnavailableError("empty skill id")
        owner, name = repo

        async with self._client() as client:
            primary = f"skills/{skill_id}/{MANIFEST_FILENAME}"
            try:
                response = await client.get(self._raw_url(owner, name, primary))
            except httpx.HTTPError as e:
                raise PreviewUnavailableError(str(e)) from e
            if response.is_success:
                return response.text
            if response.status_code != httpx.codes.NOT_FOUND:
                raise PreviewUnavailableError(f"{primary}: HTTP {response.status_code}")

            try:
                paths = await self._list_tree_paths(client, owner, name)
            except (httpx.HTTPError, ValueError) as e:
                raise PreviewUnavailableError(f"tree listing failed: {e}") from e

            for path in rank_manifest_paths(paths, skill_id):
                try:
                    candidate = await client.get(self._raw_url(owner, name, path))
                except httpx.HTTPError as e:
                    logger.debug(f"Skipping preview candidate {path}: {e}")
                    continue
                if not candidate.is_success:
                    continue
                record = parse_frontmatter(candidate.text, strict=False)
                if record is not None and record.name == skill_id:
                    return candidate.text

        raise PreviewUnavailableError(f"no SKILL.md named {skill_id!r} in {owner}/{name}")

    def _raw_url(self, owner: str, repo: str, path: str) -> str:
        return f"{self.github_raw_base}/{owner}/{repo}/HEAD/{path}"

    async def _list_tree_paths(
        self, client: httpx.AsyncClient, owner: str, repo: str
    ) -> list[str]:
        response = await client.get(
            f"{self.github_api_base}/repos/{owner}/{repo}/git/trees/HEAD",
            params={"recursive": "1"},
        )
        response.raise_for_status()
        tree = response.json().get("tree") or []
        return [item["path"] for item in tree if item.get("type") == "blob" and "path" in item]
