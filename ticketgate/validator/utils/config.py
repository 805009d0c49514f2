import os

import bittensor as bt
from dotenv import load_dotenv

from ticketgate.constants import BASE_GITHUB_API_URL
from ticketgate.utils.utils import mask_secret, parse_repo_list

load_dotenv()

# repositories that never receive status checks, as owner/repo
DO_NOT_TOUCH_REPOS = parse_repo_list(os.getenv('DO_NOT_TOUCH_REPOS'))

# required env vars
GITHUB_TOKEN = os.getenv('GITHUB_TOKEN')
JIRA_URL = os.getenv('JIRA_URL', '').rstrip('/')
JIRA_EMAIL = os.getenv('JIRA_EMAIL')
JIRA_API_TOKEN = os.getenv('JIRA_API_TOKEN')

# optional env vars
GITHUB_API_URL = os.getenv('GITHUB_API_URL', BASE_GITHUB_API_URL).rstrip('/')
GITHUB_EVENT_PATH = os.getenv('GITHUB_EVENT_PATH')

# log values
bt.logging.info(f"DO_NOT_TOUCH_REPOS: {DO_NOT_TOUCH_REPOS}")
bt.logging.info(f"GITHUB_API_URL: {GITHUB_API_URL}")
bt.logging.info(f"GITHUB_TOKEN: {mask_secret(GITHUB_TOKEN) if GITHUB_TOKEN else None}")
bt.logging.info(f"JIRA_URL: {JIRA_URL}")
bt.logging.info(f"JIRA_EMAIL: {JIRA_EMAIL}")
bt.logging.info(f"JIRA_API_TOKEN: {mask_secret(JIRA_API_TOKEN) if JIRA_API_TOKEN else None}")
