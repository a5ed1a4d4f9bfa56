"""
Object CRUD operations for one collection.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

from ..connection.base import Connection
from ..core.exceptions import ValidationError
from ..utils.logging import get_logger
from ..utils.validation import validate_collection_name, validate_tenant
from ..utils.vectors import to_vector_list


logger = get_logger(__name__)


class DataOperations:
    """
    Create, read, update and delete objects of a collection.

    Example:
        >>> data = client.collection("Article").data()
        >>> created = data.create({"title": "Hello"}, vector=np.random.randn(384))
        >>> data.update(created["id"], {"title": "Hello again"})
        >>> data.delete(created["id"])
    """

    def __init__(
        self,
        connection: Connection,
        collection: str,
        tenant: Optional[str] = None,
    ):
        self._connection = connection
        self._collection = validate_collection_name(collection)
        self._tenant = validate_tenant(tenant)

    @property
    def tenant(self) -> Optional[str]:
        return self._tenant

    def _object_path(self, object_id: str) -> str:
        if not isinstance(object_id, str) or not object_id:
            raise ValidationError("Object id must be a non-empty string")
        return f"/v1/objects/{self._collection}/{quote(object_id, safe='')}"

    def _tenant_params(self) -> Optional[Dict[str, str]]:
        return {"tenant": self._tenant} if self._tenant is not None else None

    def _with_tenant(self, path: str) -> str:
        if self._tenant is None:
            return path
        return f"{path}?tenant={quote(self._tenant, safe='')}"

    def create(
        self,
        properties: Dict[str, Any],
        id: Optional[str] = None,
        vector: Any = None,
        normalize: bool = False,
    ) -> Dict[str, Any]:
        """
        Create an object.

        Args:
            properties: Object properties; an ``id`` key is used as the
                object id when ``id`` is not given
            id: Object id (UUID); generated by the store when omitted
            vector: Optional vector (list or numpy array)
            normalize: Scale the vector to unit length before sending

        Returns:
            The created object as returned by the store
        """
        if not isinstance(properties, dict):
            raise ValidationError(
                f"Properties must be a dictionary, got {type(properties).__name__}"
            )

        props = dict(properties)
        object_id = id if id is not None else props.pop("id", None)
        props.pop("id", None)

        data: Dict[str, Any] = {
            "class": self._collection,
            "properties": props,
        }
        if object_id is not None:
            data["id"] = object_id
        if vector is not None:
            data["vector"] = to_vector_list(vector, normalize=normalize)
        if self._tenant is not None:
            data["tenant"] = self._tenant

        logger.debug(f"Creating object in '{self._collection}'")
        return self._connection.post("/v1/objects", data)

    def get(self, id: str) -> Dict[str, Any]:
        """Fetch one object by id; NotFoundError if it does not exist."""
        return self._connection.get(self._object_path(id), self._tenant_params())

    def update(self, id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge properties into an object and return the updated object.

        PATCH responses may be empty, so the object is fetched afterwards.
        """
        data: Dict[str, Any] = {
            "class": self._collection,
            "properties": dict(properties),
        }
        if self._tenant is not None:
            data["tenant"] = self._tenant

        self._connection.patch(self._with_tenant(self._object_path(id)), data)
        return self.get(id)

    def delete(self, id: str) -> bool:
        """Delete an object; True when the store confirmed deletion."""
        return self._connection.delete(self._with_tenant(self._object_path(id)))

    def exists(self, id: str) -> bool:
        """Whether an object with this id exists."""
        return self._connection.head(self._with_tenant(self._object_path(id)))
