"""
Factories for relationship records.

ParentChildRelationship is a directed 1:n edge with an optional account URN.
CollectionMemberRelationship is an n:n edge that always carries an account URN.
"""
import logging
from typing import Optional

from relational_store.exceptions import MissingRequiredFieldError
from relational_store.factories.validation import is_blank, optional_urn, reject, require_urn
from relational_store.models.records import (
    CollectionMembershipRelationshipRecord,
    ParentChildRelationshipRecord,
)
from relational_store.utils.clock import Clock
from relational_store.utils.key_generation import (
    generate_collection_member_key,
    generate_parent_child_key,
)
from relational_store.utils.timestamps import get_current_timestamp

logger = logging.getLogger(__name__)


def create_parent_child_relationship(
    parent_urn: str,
    child_urn: str,
    account_urn: Optional[str] = None,
    *,
    clock: Optional[Clock] = None,
) -> ParentChildRelationshipRecord:
    """
    Create a ParentChildRelationship record.

    Raises:
        InvalidFormatError: parent_urn, child_urn or a supplied account_urn is
            not a valid URN (checked in that order)

    Example:
        relationship = create_parent_child_relationship(
            'urn:pp:System::01955556-3cd2-7df2-b839-693fa6fbd505',
            'urn:pp:System.Account::01955557-3cd2-7df2-b839-693fa6fbd506',
        )
        # relationship.pk == 'Parent#urn:pp:System::0195...'
        # relationship.sk == 'Child#urn:pp:System.Account::0195...'
    """
    operation = 'create_parent_child_relationship'
    require_urn(parent_urn, "parent URN", "parentUrn", operation)
    require_urn(child_urn, "child URN", "childUrn", operation)
    account_urn = optional_urn(account_urn, "accountUrn", "accountUrn", operation)

    keys = generate_parent_child_key(parent_urn, child_urn)

    record = ParentChildRelationshipRecord(
        pk=keys['PK'],
        sk=keys['SK'],
        parent_urn=parent_urn,
        child_urn=child_urn,
        created_at=get_current_timestamp(clock),
        account_urn=account_urn,
    )
    logger.debug(f"Created ParentChildRelationship {parent_urn} -> {child_urn}")
    return record


def create_collection_membership_relationship(
    collection_urn: str,
    member_urn: str,
    account_urn: str,
    *,
    clock: Optional[Clock] = None,
) -> CollectionMembershipRelationshipRecord:
    """
    Create a CollectionMemberRelationship record.

    account_urn is required here, unlike on parent/child relationships.

    Raises:
        MissingRequiredFieldError: account_urn is missing, empty or whitespace-only
        InvalidFormatError: collection_urn, member_urn or account_urn is not a
            valid URN (checked in that order)
    """
    operation = 'create_collection_membership_relationship'
    if is_blank(account_urn):
        reject(
            MissingRequiredFieldError(
                "AccountUrn is required for CollectionMembershipRelationship",
                field="accountUrn",
                value=account_urn,
            ),
            operation
        )

    require_urn(collection_urn, "collection URN", "collectionUrn", operation)
    require_urn(member_urn, "member URN", "memberUrn", operation)
    require_urn(account_urn, "accountUrn", "accountUrn", operation)

    keys = generate_collection_member_key(collection_urn, member_urn)

    record = CollectionMembershipRelationshipRecord(
        pk=keys['PK'],
        sk=keys['SK'],
        collection_urn=collection_urn,
        member_urn=member_urn,
        created_at=get_current_timestamp(clock),
        account_urn=account_urn,
    )
    logger.debug(f"Created CollectionMemberRelationship {collection_urn} -> {member_urn}")
    return record
