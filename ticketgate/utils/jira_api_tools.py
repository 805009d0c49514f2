# The MIT License (MIT)
# Copyright © 2025 Entrius
from typing import Dict, Optional, Tuple

import bittensor as bt
import requests

from ticketgate.classes import TicketState
from ticketgate.constants import JIRA_ISSUE_ENDPOINT, JIRA_REQUEST_TIMEOUT


class JiraAPIError(requests.HTTPError):
    """Raised when the Jira API answers with an unexpected status code."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Optional[requests.Response] = None):
        super().__init__(message, response=response)
        self.status_code = status_code


def make_jira_auth(
    email: Optional[str], api_token: Optional[str]
) -> Tuple[Dict[str, str], Optional[Tuple[str, str]]]:
    """Build headers and auth for Jira.

    An email plus API token uses basic auth (Jira Cloud); a token alone is sent
    as a bearer personal access token (Jira Data Center). Neither means anonymous.

    Returns:
        Tuple of (headers, basic_auth)
    """
    headers = {'Accept': 'application/json'}
    if api_token and email:
        return headers, (email, api_token)
    if api_token:
        headers['Authorization'] = f'Bearer {api_token}'
    return headers, None


def get_jira_issue_status(
    issue_key: str,
    jira_url: str,
    email: Optional[str] = None,
    api_token: Optional[str] = None,
) -> Optional[TicketState]:
    '''
    Look up the workflow status of a Jira issue.

    Args:
        issue_key (str): Issue key such as 'ABC-123'
        jira_url (str): Jira base URL
        email (Optional[str]): Account email for basic auth
        api_token (Optional[str]): API token or personal access token
    Returns:
        Optional[TicketState]: Issue key and status name, or None if the issue does not exist
    Raises:
        JiraAPIError: on any other non-200 response
    '''
    headers, auth = make_jira_auth(email, api_token)
    response = requests.get(
        f"{jira_url}{JIRA_ISSUE_ENDPOINT.format(issue_key=issue_key)}",
        headers=headers,
        auth=auth,
        params={'fields': 'status'},
        timeout=JIRA_REQUEST_TIMEOUT,
    )

    if response.status_code == 404:
        bt.logging.info(f"Jira issue {issue_key} not found")
        return None

    if response.status_code != 200:
        raise JiraAPIError(
            f"Failed to get Jira issue {issue_key}: status {response.status_code}",
            status_code=response.status_code,
            response=response,
        )

    issue = response.json()
    status = issue['fields']['status']['name']
    bt.logging.debug(f"Jira issue {issue['key']} has status {status}")
    return TicketState(key=issue['key'], status=status)
