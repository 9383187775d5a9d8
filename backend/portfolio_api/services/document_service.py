"""
Portfolio API - Document Service
================================

What:  One stateless service per collection wrapping the six document
       operations the routes need.
How:   Each method receives the shared `Database` handle, performs exactly
       one driver call and translates the outcome:
         - malformed ObjectId          → InvalidInputError (before any I/O)
         - missing document on get     → NotFoundError
         - any PyMongoError            → UpstreamFailureError
Who:   Called by the route handlers in portfolio_api.routes.

Operations:
    list_all       find({})            → list of documents
    get_by_id      find_one({_id})     → document
    insert_one     insert_one(doc)     → InsertOneResponse
    insert_many    insert_many(docs)   → InsertManyResponse
    update_by_id   update_one($set)    → UpdateResponse
    delete_by_id   delete_one({_id})   → DeleteResponse
"""

import logging
from typing import Any, Dict, List

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from portfolio_api import database
from portfolio_api.database import Database
from portfolio_api.exceptions import (
    InvalidInputError,
    NotFoundError,
    UpstreamFailureError,
)
from portfolio_api.schemas.common import (
    DeleteResponse,
    InsertManyResponse,
    InsertOneResponse,
    UpdateResponse,
)

logger = logging.getLogger(__name__)


def parse_object_id(value: str) -> ObjectId:
    """Convert a path parameter into an ObjectId or raise InvalidInputError."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise InvalidInputError(
            message=f"'{value}' is not a valid document id",
            field="id",
        )


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return a JSON-ready copy of a stored document (`_id` as hex string)."""
    data = dict(document)
    if isinstance(data.get("_id"), ObjectId):
        data["_id"] = str(data["_id"])
    return data


class DocumentService:
    """
    CRUD operations over a single collection.

    Attributes:
        collection_name:  MongoDB collection the service reads and writes
        resource:         Singular name used in error messages ("project")
    """

    def __init__(self, collection_name: str, resource: str):
        self.collection_name = collection_name
        self.resource = resource

    def _upstream_failure(self, operation: str, error: PyMongoError, **context: Any) -> UpstreamFailureError:
        # Why: driver messages can name hosts and credentials; they go to the log,
        # the client only sees the generic UpstreamFailureError message
        logger.error(
            "MongoDB %s on '%s' failed: %s",
            operation,
            self.collection_name,
            str(error),
        )
        return UpstreamFailureError(
            context={
                "collection": self.collection_name,
                "operation": operation,
                "error_type": type(error).__name__,
                **context,
            },
        )

    async def list_all(self, db: Database) -> List[Dict[str, Any]]:
        """Every document in the collection, in natural order."""
        try:
            documents = await db.collection(self.collection_name).find({}).to_list(length=None)
        except PyMongoError as e:
            raise self._upstream_failure("find", e) from e
        return [serialize_document(doc) for doc in documents]

    async def get_by_id(self, db: Database, document_id: str) -> Dict[str, Any]:
        """
        Fetch one document by its ObjectId.

        Raises:
            InvalidInputError: `document_id` is not a 24-hex ObjectId
            NotFoundError: no document has that id
            UpstreamFailureError: the query failed
        """
        oid = parse_object_id(document_id)
        try:
            document = await db.collection(self.collection_name).find_one({"_id": oid})
        except PyMongoError as e:
            raise self._upstream_failure("find_one", e, document_id=document_id) from e

        if document is None:
            raise NotFoundError(resource=self.resource, resource_id=document_id)
        return serialize_document(document)

    async def insert_one(self, db: Database, document: Dict[str, Any]) -> InsertOneResponse:
        # The driver writes the generated _id back into the dict it is given
        payload = dict(document)
        try:
            result = await db.collection(self.collection_name).insert_one(payload)
        except PyMongoError as e:
            raise self._upstream_failure("insert_one", e) from e

        logger.info("Inserted %s %s", self.resource, result.inserted_id)
        return InsertOneResponse(
            acknowledged=result.acknowledged,
            inserted_id=str(result.inserted_id),
        )

    async def insert_many(self, db: Database, documents: List[Dict[str, Any]]) -> InsertManyResponse:
        """
        Bulk insert. The response maps each input position to its new id,
        matching the driver's `insertedIds` object.
        """
        if not documents:
            raise InvalidInputError(
                message=f"At least one {self.resource} is required",
                field="body",
            )
        payload = [dict(doc) for doc in documents]
        try:
            result = await db.collection(self.collection_name).insert_many(payload)
        except PyMongoError as e:
            raise self._upstream_failure("insert_many", e, count=len(payload)) from e

        inserted_ids = {str(index): str(oid) for index, oid in enumerate(result.inserted_ids)}
        logger.info("Inserted %d %s documents", len(inserted_ids), self.resource)
        return InsertManyResponse(
            acknowledged=result.acknowledged,
            inserted_count=len(inserted_ids),
            inserted_ids=inserted_ids,
        )

    async def update_by_id(
        self,
        db: Database,
        document_id: str,
        changes: Dict[str, Any],
    ) -> UpdateResponse:
        """
        Merge `changes` into the stored document with `$set`.

        Never upserts: an unknown id yields success=False, as does an
        update that leaves the document unchanged.
        """
        oid = parse_object_id(document_id)
        if not changes:
            raise InvalidInputError(
                message="Update body must contain at least one field",
                field="body",
            )
        try:
            result = await db.collection(self.collection_name).update_one(
                {"_id": oid},
                {"$set": changes},
            )
        except PyMongoError as e:
            raise self._upstream_failure("update_one", e, document_id=document_id) from e

        title = self.resource.capitalize()
        if result.modified_count == 1:
            logger.info("Updated %s %s", self.resource, document_id)
            return UpdateResponse(success=True, message=f"{title} updated successfully")
        return UpdateResponse(success=False, message=f"{title} not found or no changes made")

    async def delete_by_id(self, db: Database, document_id: str) -> DeleteResponse:
        oid = parse_object_id(document_id)
        try:
            result = await db.collection(self.collection_name).delete_one({"_id": oid})
        except PyMongoError as e:
            raise self._upstream_failure("delete_one", e, document_id=document_id) from e

        if result.deleted_count:
            logger.info("Deleted %s %s", self.resource, document_id)
        return DeleteResponse(
            acknowledged=result.acknowledged,
            deleted_count=result.deleted_count,
        )


# ── Service Instances ─────────────────────────────────────────────────────
project_service = DocumentService(database.PROJECTS, "project")
skill_service = DocumentService(database.SKILLS, "skill")
backend_skill_service = DocumentService(database.BACKEND_SKILLS, "backend skill")
contact_service = DocumentService(database.CONTACTS, "contact")
blog_service = DocumentService(database.BLOGS, "blog")
