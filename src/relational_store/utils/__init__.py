"""
Utils package.

- All identifiers embedded in keys are URNs of the form
  urn:{domain}:{resourceType}::{resourceId}, where resourceId is a UUID v7.
- All timestamps are ISO-8601 strings in UTC with millisecond precision
  (YYYY-MM-DDTHH:mm:ss.sssZ).
- Key derivation functions validate their URN inputs and raise ValueError
  subclasses from relational_store.exceptions; validate_urn, is_valid_uuid_v7
  and is_valid_iso8601 return booleans and never raise.
"""
