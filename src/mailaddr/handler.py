"""
AWS Lambda handler for resolving SES receipt recipients to mailboxes.

Thin orchestration layer that delegates to RecipientProcessor.
Each record's sender is validated and each recipient resolved; results are
returned, never raised.
"""

import json
import logging
import os
from typing import Dict, Any

from .domain.models import AddressParseError, ErrorKind
from .domain.recipient_processor import RecipientProcessor
from .services.address import parse_email_address

# Environment variables
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
ENVIRONMENT = os.environ.get('ENVIRONMENT', 'dev')
MAILBOX_DOMAINS = [
    d.strip() for d in os.environ.get('MAILBOX_DOMAINS', '').split(',') if d.strip()
]

# Configure logging
logger = logging.getLogger()
logger.setLevel(LOG_LEVEL)

# Add console handler for local testing (AWS Lambda provides handlers automatically)
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(LOG_LEVEL)
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

# Initialize processor once at module level (reused across invocations)
recipient_processor = RecipientProcessor(MAILBOX_DOMAINS)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Resolve the recipients of SES receipt notifications.

    Expected event format:
    {
        "Records": [{
            "ses": {
                "mail": {"messageId": "...", "source": "sender@example.com"},
                "receipt": {"recipients": ["user@example.com"]}
            }
        }]
    }

    Args:
        event: Lambda event with SES records
        context: Lambda context

    Returns:
        Dict with statusCode and a JSON body listing mailboxes and rejections
    """
    records = event.get('Records') if isinstance(event, dict) else None
    if not isinstance(records, list):
        logger.error("Event has no Records list")
        return {
            'statusCode': 400,
            'body': json.dumps({'error': 'Records list is required'})
        }

    logger.info("=" * 70)
    logger.info(f"Recipient resolution - {len(records)} record(s)")
    logger.info("=" * 70)

    try:
        results = [_process_record(record) for record in records]

    except ValueError as ve:
        logger.error(f"Validation error: {str(ve)}")
        return {
            'statusCode': 400,
            'body': json.dumps({'error': str(ve)})
        }

    except Exception as e:
        logger.error(f"Error resolving recipients: {str(e)}", exc_info=True)
        return {
            'statusCode': 500,
            'body': json.dumps({
                'error': 'Internal server error',
                'message': str(e)
            })
        }

    resolved = sum(len(r['mailboxes']) for r in results)
    rejected = sum(len(r['rejected']) for r in results)
    logger.info("=" * 70)
    logger.info(f"Batch complete: {len(results)} record(s)")
    logger.info(f"  Resolved: {resolved}")
    logger.info(f"  Rejected: {rejected}")
    logger.info("=" * 70)

    return {
        'statusCode': 200,
        'body': json.dumps({'records': results})
    }


def health_check(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Report handler status and the local delivery domains it resolves for.

    An empty domain list means every syntactically valid domain is local.
    """
    return {
        'statusCode': 200,
        'body': json.dumps({
            'status': 'healthy',
            'environment': ENVIRONMENT,
            'acceptsAllDomains': not recipient_processor.accepted_domains,
            'mailboxDomainCount': len(recipient_processor.accepted_domains),
            'mailboxDomains': sorted(recipient_processor.accepted_domains)
        })
    }


def _process_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Resolve one SES record.

    Raises:
        ValueError: If the record is missing its 'ses', 'mail' or 'receipt'
            structure, or its recipients are not a list
    """
    ses = record.get('ses') if isinstance(record, dict) else None
    if not isinstance(ses, dict) or 'mail' not in ses or 'receipt' not in ses:
        raise ValueError("SES record missing 'mail' or 'receipt' fields")

    mail = ses['mail']
    receipt = ses['receipt']
    if not isinstance(mail, dict) or not isinstance(receipt, dict):
        raise ValueError("SES 'mail' and 'receipt' fields must be objects")

    message_id = mail.get('messageId', 'UNKNOWN')
    source = mail.get('source', '')

    try:
        if not isinstance(source, str):
            raise AddressParseError(
                ErrorKind.INVALID_CHARACTER,
                f"Sender must be a string, got {type(source).__name__}"
            )
        parse_email_address(source)
        sender_valid = True
    except AddressParseError as e:
        logger.warning(f"Message {message_id}: invalid sender {source!r}: {e.message}")
        sender_valid = False

    recipients = receipt.get('recipients', [])
    if isinstance(recipients, str):
        recipients = [recipients]
    if not isinstance(recipients, list):
        raise ValueError("SES 'receipt.recipients' must be a list")

    results = recipient_processor.resolve_many(recipients)

    return {
        'messageId': message_id,
        'sender': source,
        'sender_valid': sender_valid,
        'mailboxes': [r.to_dict() for r in results if r.success],
        'rejected': [r.to_dict() for r in results if not r.success],
    }
