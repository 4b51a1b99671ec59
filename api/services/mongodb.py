# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
MongoDB record store with connection pooling.
"""

import os
import logging
from typing import List, Dict, Optional, Any
from pymongo import MongoClient, ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import (
    ConnectionFailure,
    ServerSelectionTimeoutError,
    DuplicateKeyError
)
from bson import ObjectId
from bson.errors import InvalidId

from domain.errors import ConflictError
from models.base import utc_now

logger = logging.getLogger(__name__)

TEAMS = "teams"
NOTICES = "notices"
VEHICLES = "vehicles"
INSPECTIONS = "safety_inspections"
SETTINGS = "settings"


class MongoDBService:
    """MongoDB record store shared by every portal service."""

    def __init__(
        self,
        connection_string: str = None,
        database_name: str = None,
        max_pool_size: int = None,
        min_pool_size: int = None,
        server_selection_timeout_ms: int = None
    ):
        """Initialize MongoDB service with connection pooling."""
        self.connection_string = connection_string or os.getenv(
            'MONGODB_URI',
            'mongodb://localhost:27017/safety_portal_dev'
        )
        self.database_name = database_name or os.getenv('MONGODB_DATABASE', 'safety_portal_dev')
        self._client: Optional[MongoClient] = None
        self._database: Optional[Database] = None

        # Connection pool settings
        self.max_pool_size = max_pool_size or int(os.getenv('MONGODB_MAX_POOL_SIZE', '10'))
        self.min_pool_size = min_pool_size if min_pool_size is not None else int(os.getenv('MONGODB_MIN_POOL_SIZE', '1'))
        self.max_idle_time_ms = int(os.getenv('MONGODB_MAX_IDLE_TIME_MS', '30000'))
        self.server_selection_timeout_ms = server_selection_timeout_ms or int(os.getenv('MONGODB_SERVER_SELECTION_TIMEOUT_MS', '5000'))

        logger.info(f"MongoDB service initialized for database: {self.database_name}")

    @property
    def client(self) -> MongoClient:
        """Get MongoDB client with connection pooling."""
        if self._client is None:
            try:
                self._client = MongoClient(
                    self.connection_string,
                    maxPoolSize=self.max_pool_size,
                    minPoolSize=self.min_pool_size,
                    maxIdleTimeMS=self.max_idle_time_ms,
                    serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                    retryWrites=True,
                    retryReads=True,
                    tz_aware=True
                )
                self._client.admin.command('ping')
                logger.info("MongoDB connection established successfully")
            except (ConnectionFailure, ServerSelectionTimeoutError) as e:
                logger.error(f"Failed to connect to MongoDB: {e}")
                raise

        return self._client

    @property
    def database(self) -> Database:
        if self._database is None:
            self._database = self.client[self.database_name]
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        return self.database[collection_name]

    def close_connection(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("MongoDB connection closed")

    def health_check(self) -> Dict[str, Any]:
        """Check MongoDB connection health."""
        try:
            result = self.client.admin.command('ping')
            server_info = self.client.server_info()

            return {
                'status': 'healthy',
                'ping': result.get('ok') == 1,
                'version': server_info.get('version'),
                'database': self.database_name,
                'connection_pool_size': self.max_pool_size
            }
        except Exception as e:
            logger.error(f"MongoDB health check failed: {e}")
            return {
                'status': 'unhealthy',
                'error': str(e),
                'database': self.database_name
            }

    def _object_id(self, doc_id: str) -> Optional[ObjectId]:
        """Convert a string ID; malformed IDs match nothing."""
        try:
            return ObjectId(doc_id)
        except (InvalidId, TypeError):
            logger.debug(f"Invalid ObjectId format: {doc_id}")
            return None

    @staticmethod
    def _to_record(document: Optional[Dict]) -> Optional[Dict]:
        """Expose the MongoDB _id as a string id."""
        if document is None:
            return None
        if "_id" in document:
            document["id"] = str(document.pop("_id"))
        return document

    # CRUD operations

    def get(self, collection: str, doc_id: str) -> Optional[Dict]:
        """Fetch a single document by ID."""
        object_id = self._object_id(doc_id)
        if object_id is None:
            return None
        try:
            document = self.get_collection(collection).find_one({"_id": object_id})
            if document is None:
                logger.debug(f"Document {doc_id} not found in {collection}")
            return self._to_record(document)
        except Exception as e:
            logger.error(f"Failed to find document {doc_id} in {collection}: {e}")
            raise

    def find(self, collection: str, filters: Dict = None, sort_by: str = None,
             sort_order: int = DESCENDING) -> List[Dict]:
        """Find documents matching equality filters."""
        try:
            cursor = self.get_collection(collection).find(filters or {})
            if sort_by:
                cursor = cursor.sort(sort_by, sort_order)
            documents = [self._to_record(doc) for doc in cursor]
            logger.debug(f"Found {len(documents)} documents in {collection}")
            return documents
        except Exception as e:
            logger.error(f"Failed to find documents in {collection}: {e}")
            raise

    def find_one(self, collection: str, filters: Dict) -> Optional[Dict]:
        try:
            return self._to_record(self.get_collection(collection).find_one(filters))
        except Exception as e:
            logger.error(f"Failed to find document in {collection}: {e}")
            raise

    def insert(self, collection: str, document: Dict, doc_id: str = None) -> Dict:
        """
        Insert a new document.

        Args:
            collection: Collection name
            document: Document fields (camelCase)
            doc_id: Optional pre-generated ObjectId string

        Returns:
            Inserted document with its string id

        Raises:
            ConflictError: If a unique index rejects the document
        """
        document = dict(document)
        document["_id"] = self._object_id(doc_id) if doc_id else ObjectId()
        try:
            result = self.get_collection(collection).insert_one(document)
            logger.info(f"Created document in {collection}: {result.inserted_id}")
            return self._to_record(document)
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key error in {collection}: {e}")
            raise ConflictError("Document with this identifier already exists")
        except Exception as e:
            logger.error(f"Failed to create document in {collection}: {e}")
            raise

    def update(self, collection: str, doc_id: str, fields: Dict) -> Optional[Dict]:
        """
        Set fields on a document atomically.

        Returns:
            Updated document, or None if it does not exist
        """
        object_id = self._object_id(doc_id)
        if object_id is None:
            return None
        try:
            document = self.get_collection(collection).find_one_and_update(
                {"_id": object_id},
                {"$set": fields},
                return_document=ReturnDocument.AFTER
            )
            if document is None:
                logger.warning(f"No document updated for {doc_id} in {collection}")
            else:
                logger.info(f"Updated document {doc_id} in {collection}")
            return self._to_record(document)
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key error updating {doc_id} in {collection}: {e}")
            raise ConflictError("Document with this identifier already exists")
        except Exception as e:
            logger.error(f"Failed to update document {doc_id} in {collection}: {e}")
            raise

    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document; returns False when nothing matched."""
        object_id = self._object_id(doc_id)
        if object_id is None:
            return False
        try:
            result = self.get_collection(collection).delete_one({"_id": object_id})
            if result.deleted_count > 0:
                logger.info(f"Deleted document {doc_id} in {collection}")
                return True
            logger.warning(f"No document deleted for {doc_id} in {collection}")
            return False
        except Exception as e:
            logger.error(f"Failed to delete document {doc_id} in {collection}: {e}")
            raise

    def count(self, collection: str, filters: Dict = None) -> int:
        try:
            return self.get_collection(collection).count_documents(filters or {})
        except Exception as e:
            logger.error(f"Failed to count documents in {collection}: {e}")
            raise

    def upsert_setting(self, key: str, value: str) -> Dict:
        """Create or replace a key/value setting."""
        try:
            document = self.get_collection(SETTINGS).find_one_and_update(
                {"key": key},
                {"$set": {"key": key, "value": value, "updatedAt": utc_now()}},
                upsert=True,
                return_document=ReturnDocument.AFTER
            )
            logger.info(f"Setting {key} stored")
            return self._to_record(document)
        except Exception as e:
            logger.error(f"Failed to store setting {key}: {e}")
            raise

    # Index Management

    def create_indexes(self) -> None:
        """Create uniqueness and performance indexes for all collections."""
        try:
            logger.info("Creating MongoDB indexes...")

            teams = self.get_collection(TEAMS)
            teams.create_index([("year", ASCENDING), ("name", ASCENDING)], unique=True)
            teams.create_index([("year", ASCENDING), ("totalScore", DESCENDING)])

            notices = self.get_collection(NOTICES)
            notices.create_index([("category", ASCENDING), ("createdAt", DESCENDING)])

            vehicles = self.get_collection(VEHICLES)
            vehicles.create_index("plateNumber", unique=True)
            vehicles.create_index([("team", ASCENDING), ("status", ASCENDING)])

            inspections = self.get_collection(INSPECTIONS)
            inspections.create_index([("inspectionDate", DESCENDING)])

            settings = self.get_collection(SETTINGS)
            settings.create_index("key", unique=True)

            logger.info("MongoDB indexes created successfully")

        except Exception as e:
            logger.error(f"Failed to create MongoDB indexes: {e}")
            raise


# Singleton instance for application use
_mongodb_service: Optional[MongoDBService] = None


def get_mongodb_service() -> MongoDBService:
    """Get singleton MongoDB service instance."""
    global _mongodb_service
    if _mongodb_service is None:
        _mongodb_service = MongoDBService()
    return _mongodb_service


def close_mongodb_connection() -> None:
    """Close MongoDB connection (for cleanup)."""
    global _mongodb_service
    if _mongodb_service:
        _mongodb_service.close_connection()
        _mongodb_service = None
