"""HTTP client for communicating with the Portal service."""

import time
import uuid
from pathlib import Path
from typing import Callable, Optional

import httpx

from common.logging_config import get_logger
from cli.config import Config
from cli.constants import GREEN, RESET
from cli.utils import format_size

logger = get_logger(__name__)


class PortalClient:
    """HTTP client for the Portal admin API with retry logic and error handling."""

    def __init__(self, config: Config):
        """
        Initialize portal client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized PortalClient [base_url={config.get_base_url()}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        if 'headers' not in kwargs:
            kwargs['headers'] = {}
        kwargs['headers']['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )
                    return response

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Portal may be overloaded.")
        if last_exception is not None:
            raise ConnectionError("Cannot connect to portal server. Is it running?")
        raise ConnectionError("Max retries exceeded")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.

        Args:
            response: HTTP response object

        Returns:
            User-friendly error message
        """
        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        if not isinstance(detail, str):
            # pydantic validation errors arrive as a list of dicts
            detail = '; '.join(str(item.get('msg', item)) for item in detail if isinstance(item, dict)) or str(detail)
            code = 'VALIDATION_ERROR'

        error_messages = {
            'FORBIDDEN': 'Admin token rejected. Please run: config set-token <token>',
            'INVALID_NAME': f'Invalid name: {detail}',
            'VALUE_TOO_LARGE': 'Value too large for the store.',
            'UPSTREAM_FETCH_FAILED': 'Upstream video source failed.',
            'VALIDATION_ERROR': f'Invalid request: {detail}',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            403: 'Access forbidden',
            404: 'Not found',
            413: 'Value too large',
            500: 'Server error',
            502: 'Bad gateway',
            503: 'Service unavailable',
        }

        message = status_messages.get(response.status_code, detail)
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def _get_admin_header(self) -> dict:
        """
        Get X-Admin-Token header.

        Returns:
            Dictionary with the admin token header

        Raises:
            ValueError: If no admin token is configured
        """
        token = self.config.get_admin_token()
        if not token:
            raise ValueError("No admin token configured. Please run: config set-token <token>")
        return {'X-Admin-Token': token}

    def _admin_call(
        self,
        method: str,
        endpoint: str,
        expected_status: int,
        render: Callable[[httpx.Response], str],
        **kwargs
    ) -> str:
        """
        Run an admin request and render its result.

        Returns:
            render(response) on the expected status, otherwise an error line
        """
        try:
            kwargs['headers'] = self._get_admin_header()
        except ValueError as e:
            return f"Error: {e}"

        try:
            response = self._request_with_retry(method, endpoint, **kwargs)
        except ConnectionError as e:
            logger.error(f"Connection error: {method} {endpoint}: {e}")
            return f"Error: {e}"

        if response.status_code != expected_status:
            return f"Error: {self._format_error(response)}"
        return render(response)

    def list_keys(self) -> str:
        """
        List all premium keys.

        Returns:
            One line per key with owner and expiry
        """
        def render(response: httpx.Response) -> str:
            keys = response.json()['keys']
            if not keys:
                return "No premium keys issued."
            lines = [f"Found {len(keys)} key(s):"]
            for key in keys:
                lines.append(f"  - {key['key']}  owner={key['owner']}  expires={key['expiry_date']}")
            return '\n'.join(lines)

        return self._admin_call('GET', '/admin/keys', 200, render)

    def create_key(self, duration_days: int, owner: str) -> str:
        """
        Issue a premium key.

        Args:
            duration_days: Validity in days
            owner: Who the key is for

        Returns:
            The new key and its expiry
        """
        logger.info(f"Creating premium key [owner={owner}] duration_days={duration_days}")

        def render(response: httpx.Response) -> str:
            data = response.json()
            return f"Created key {GREEN}{data['key']}{RESET}\nOwner: {data['owner']}\nExpires: {data['expiry_date']}"

        return self._admin_call(
            'POST', '/admin/keys', 201, render,
            json={'duration_days': duration_days, 'owner': owner},
        )

    def delete_key(self, key: str) -> str:
        return self._admin_call(
            'DELETE', f'/admin/keys/{key}', 200,
            lambda response: "Key deleted. Sessions bound to it are no longer authorized.",
        )

    def list_scripts(self) -> str:
        try:
            response = self._request_with_retry('GET', '/scripts')
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        scripts = response.json()['scripts']
        if not scripts:
            return "No scripts stored."
        return '\n'.join([f"Found {len(scripts)} script(s):"] + [f"  - {name}" for name in scripts])

    def push_script(self, name: str, file_path: str) -> str:
        """
        Upload a local text file as a script, replacing any existing one.

        Args:
            name: Script name on the portal
            file_path: Local UTF-8 text file

        Returns:
            Size and chunk count on success
        """
        path = Path(file_path)
        if not path.is_file():
            return f"Error: File not found: {file_path}"
        try:
            content = path.read_bytes().decode('utf-8')
        except (OSError, UnicodeDecodeError) as e:
            return f"Error reading {file_path}: {e}"

        def render(response: httpx.Response) -> str:
            data = response.json()
            return f"Pushed script {data['name']} ({format_size(data['size'])}, {data['chunks']} chunk(s))"

        return self._admin_call('PUT', f'/admin/scripts/{name}', 200, render, json={'content': content})

    def pull_script(self, name: str, output_path: Optional[str] = None) -> str:
        """
        Fetch a script's raw content.

        Args:
            name: Script name
            output_path: Optional local file to write; content is returned otherwise

        Returns:
            The content, or a confirmation when written to a file
        """
        try:
            response = self._request_with_retry('GET', f'/scripts/{name}/raw')
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        if output_path is None:
            return response.text

        try:
            Path(output_path).write_bytes(response.content)
        except OSError as e:
            return f"Error writing file: {e}"
        return f"Saved script {name} to {output_path}"

    def delete_script(self, name: str) -> str:
        return self._admin_call(
            'DELETE', f'/admin/scripts/{name}', 204,
            lambda response: f"Script {name} deleted.",
        )

    def list_movies(self, page: int = 1) -> str:
        """
        Show one page of the public catalog.

        Args:
            page: 1-based page number

        Returns:
            Formatted catalog page
        """
        try:
            response = self._request_with_retry('GET', '/movies', params={'page': page})
        except ConnectionError as e:
            return f"Error: {e}"

        if response.status_code != 200:
            return f"Error: {self._format_error(response)}"

        data = response.json()
        if not data['movies']:
            return "No movies in the catalog."

        lines = [f"Page {data['page']}/{data['total_pages']} ({data['total_movies']} movie(s)):"]
        for movie in data['movies']:
            marker = " [premium]" if movie['premium'] else ""
            lines.append(f"  - {movie['slug']}: {movie['title']}{marker}")
        return '\n'.join(lines)

    def delete_movie(self, slug: str) -> str:
        return self._admin_call(
            'DELETE', f'/admin/movies/{slug}', 204,
            lambda response: f"Movie {slug} deleted.",
        )

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
