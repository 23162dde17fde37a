from typing import Any, Dict, List, Mapping, Optional

from certificates import repair_certificates
from errors import ValidationError

# Checked in this order, the first missing one is reported
REQUIRED_FIELDS = (
    'domainName',
    'certificateChain',
    'certificateBody',
    'certificatePrivateKey',
    'certificateName',
)

# Fields that can change in place through UpdateDomainName
PATCHABLE_FIELDS = ('certificateName',)


def validate_properties(properties: Mapping[str, Any]) -> None:
    for field in REQUIRED_FIELDS:
        if not properties.get(field):
            raise ValidationError(field)


def validate_event(event: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validates the desired state of a lifecycle event and returns a new event
    with the certificates of both the new and the old properties repaired.
    The event passed in is left untouched.
    """
    properties = event.get('ResourceProperties') or {}
    validate_properties(properties)

    validated = dict(event)
    validated['ResourceProperties'] = repair_certificates(properties)
    if event.get('OldResourceProperties'):
        validated['OldResourceProperties'] = repair_certificates(event['OldResourceProperties'])
    return validated


def build_patch_operations(
    new: Mapping[str, Any],
    old: Optional[Mapping[str, Any]]
) -> List[Dict[str, Any]]:
    old = old or {}
    return [
        {'op': 'replace', 'path': f"/{field}", 'value': new.get(field)}
        for field in PATCHABLE_FIELDS
        if new.get(field) != old.get(field)
    ]
