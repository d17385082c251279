"""GC Notify client."""

import calendar
import json
import time
from typing import Dict, List

import jwt
import requests

from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings

logger = get_module_logger()

EMAIL_ENDPOINT = "/v2/notifications/email"
BULK_ENDPOINT = "/v2/notifications/bulk"


# generate the epoch seconds for the jwt token
def epoch_seconds():
    return calendar.timegm(time.gmtime())


def create_jwt_token(secret, client_id):
    """
    Generate a JWT Token for the Notify API

    Tokens have a header consisting of:
    {
        "typ": "JWT",
        "alg": "HS256"
    }

    Parameters:
    secret: Application signing secret
    client_id: Identifier for the client

    Claims are:
    iss: identifier for the client
    iat: epoch seconds for the token (UTC)

    Returns a JWT token for this request
    """
    if not secret:
        logger.error("jwt_token_creation_failed", error="Missing secret key")
        raise ValueError("Missing secret key")
    if not client_id:
        logger.error("jwt_token_creation_failed", error="Missing client id")
        raise ValueError("Missing client id")

    headers = {"typ": "JWT", "alg": "HS256"}

    claims = {"iss": client_id, "iat": epoch_seconds()}
    t = jwt.encode(payload=claims, key=secret, headers=headers)
    if isinstance(t, str):
        return t
    else:
        return t.decode()


def create_authorization_header():
    """Function to create the authorization header for the Notify API"""
    notify = get_settings().notify
    client_id = notify.NOTIFY_CLIENT_ID
    secret = notify.NOTIFY_CLIENT_SECRET

    if not client_id:
        error = "NOTIFY_CLIENT_ID is missing"
        logger.error("authorization_header_creation_failed", error=error)
        raise ValueError(error)
    if not secret:
        error = "NOTIFY_CLIENT_SECRET is missing"
        logger.error("authorization_header_creation_failed", error=error)
        raise ValueError(error)

    token = create_jwt_token(secret=secret, client_id=client_id)
    return "Authorization", "Bearer {}".format(token)


def post_event(url, payload, timeout=None):
    """Function to post an api call to Notify"""
    settings = get_settings()
    header_key, header_value = create_authorization_header()
    header = {
        header_key: header_value,
        "Content-Type": "application/json",
        "User-Agent": settings.notifications.user_agent,
    }
    if timeout is None:
        timeout = settings.notifications.http_timeout_seconds

    response = requests.post(
        url, data=json.dumps(payload), headers=header, timeout=timeout
    )
    return response


def send_email(email_address: str, template_id: str, personalisation: Dict):
    """Send one templated email.

    Args:
        email_address: Recipient address
        template_id: Notify template rendering the message
        personalisation: Values substituted into the template

    Returns:
        requests.Response: A successful response has a status code of 201
    """
    url = get_settings().notify.NOTIFY_API_URL.rstrip("/") + EMAIL_ENDPOINT
    payload = {
        "email_address": email_address,
        "template_id": template_id,
        "personalisation": personalisation,
    }
    response = post_event(url, payload)
    logger.info(
        "notify_email_posted",
        template_id=template_id,
        response_code=response.status_code,
    )
    return response


def send_bulk_email(
    name: str,
    template_id: str,
    email_addresses: List[str],
    personalisation: Dict,
):
    """Send the same templated email to several recipients in one job.

    Every row shares the same personalisation values.

    Args:
        name: Name of the bulk job, shown in the Notify dashboard
        template_id: Notify template rendering the message
        email_addresses: Recipient addresses
        personalisation: Values substituted into the template

    Returns:
        requests.Response: A successful response has a status code of 201
    """
    url = get_settings().notify.NOTIFY_API_URL.rstrip("/") + BULK_ENDPOINT
    keys = list(personalisation.keys())
    rows = [["email address"] + keys]
    for address in email_addresses:
        rows.append([address] + [personalisation[key] for key in keys])

    payload = {"name": name, "template_id": template_id, "rows": rows}
    response = post_event(url, payload)
    logger.info(
        "notify_bulk_email_posted",
        template_id=template_id,
        recipients=len(email_addresses),
        response_code=response.status_code,
    )
    return response
