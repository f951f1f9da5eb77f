"""
Firebase service for Firestore operations
"""

from __future__ import annotations
import asyncio
import json
import logging
import os
from typing import Optional, Dict, Any, List

import firebase_admin
from firebase_admin import credentials, firestore

from kalima.config import settings

logger = logging.getLogger(__name__)

ARTICLES = "articles"
STATIC_PAGES = "staticPages"
CATEGORIES = "categories"
USERS = "users"


class FirebaseService:
    """Service for Firebase operations"""

    _instance = None

    def __new__(cls):
        """Singleton pattern to ensure only one Firebase instance"""
        if cls._instance is None:
            cls._instance = super(FirebaseService, cls).__new__(cls)
            cls._instance._db = None
        return cls._instance

    @property
    def db(self):
        """Firestore client, created on first use"""
        if self._db is None:
            self._initialize_firebase()
            self._db = firestore.client()
        return self._db

    def _initialize_firebase(self):
        """Initialize Firebase Admin SDK with credentials"""
        try:
            # Check if already initialized
            firebase_admin.get_app()
            logger.debug("Firebase already initialized")
        except ValueError:
            if settings.DEV_MODE and settings.FIREBASE_EMULATOR_HOST:
                # Use emulator for development
                os.environ["FIRESTORE_EMULATOR_HOST"] = settings.FIREBASE_EMULATOR_HOST
                firebase_admin.initialize_app()
                logger.info(
                    f"Firebase initialized with emulator: {settings.FIREBASE_EMULATOR_HOST}")
                return

            if settings.FIREBASE_CREDENTIALS_JSON:
                try:
                    cred = credentials.Certificate(
                        json.loads(settings.FIREBASE_CREDENTIALS_JSON))
                except json.JSONDecodeError as e:
                    logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")
                    raise
                logger.info(
                    "Firebase initialized with credentials from FIREBASE_CREDENTIALS_JSON")
            else:
                cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
                logger.info(
                    f"Firebase initialized with credentials from {settings.FIREBASE_CREDENTIALS_PATH}")

            firebase_admin.initialize_app(cred)

    # ============================================
    # DOCUMENT OPERATIONS
    # ============================================

    async def get_document(self, collection_name: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one document; None when it does not exist"""
        ref = self.db.collection(collection_name).document(doc_id)
        snapshot = await asyncio.to_thread(ref.get)
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    async def set_document(
        self,
        collection_name: str,
        doc_id: str,
        data: Dict[str, Any],
        merge: bool = False,
    ) -> None:
        """Unconditional upsert; concurrent writers are last-write-wins"""
        ref = self.db.collection(collection_name).document(doc_id)
        await asyncio.to_thread(ref.set, data, merge=merge)

    async def add_document(self, collection_name: str, data: Dict[str, Any]) -> str:
        """Create a document with a store-assigned id and return the id"""
        ref = self.db.collection(collection_name).document()
        await asyncio.to_thread(ref.set, data)
        return ref.id

    async def update_document(self, collection_name: str, doc_id: str, data: Dict[str, Any]) -> None:
        ref = self.db.collection(collection_name).document(doc_id)
        await asyncio.to_thread(ref.update, data)

    async def delete_document(self, collection_name: str, doc_id: str) -> None:
        ref = self.db.collection(collection_name).document(doc_id)
        await asyncio.to_thread(ref.delete)

    async def array_union(self, collection_name: str, doc_id: str, field: str, value: Any) -> None:
        await self.update_document(
            collection_name, doc_id, {field: firestore.ArrayUnion([value])})

    async def array_remove(self, collection_name: str, doc_id: str, field: str, value: Any) -> None:
        await self.update_document(
            collection_name, doc_id, {field: firestore.ArrayRemove([value])})

    # ============================================
    # GENERIC QUERY OPERATIONS
    # ============================================
    async def query_collection(
        self,
        collection_name: str,
        filters: Optional[List[tuple]] = None,
        order_by: Optional[str] = None,
        direction: str = "ASCENDING",
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[tuple[str, Dict[str, Any]]]:
        """
        Queries a Firestore collection with filters, ordering, and pagination.

        Args:
            collection_name: The name of the Firestore collection.
            filters: A list of tuples, each representing a filter condition (field, op, value).
                     e.g., [("draft", "==", False)]. A {field: value} dict is
                     accepted as shorthand for equality filters.
            order_by: The field to order the results by.
            direction: "ASCENDING" or "DESCENDING".
            limit: The maximum number of documents to return.
            offset: The number of documents to skip.

        Returns:
            A list of (document_id, document_data) tuples in store order.
        """
        query = self.db.collection(collection_name)

        if filters:
            if isinstance(filters, dict):
                filters = [(k, "==", v) for k, v in filters.items()]

            for f in filters:
                if len(f) != 3:
                    raise ValueError(
                        f"Invalid filter format: {f}. Expected (field, op, value)")
                query = query.where(filter=firestore.FieldFilter(f[0], f[1], f[2]))

        if order_by:
            query = query.order_by(
                order_by,
                direction=firestore.Query.DESCENDING if direction == "DESCENDING"
                else firestore.Query.ASCENDING,
            )

        if offset:
            query = query.offset(offset)

        if limit:
            query = query.limit(limit)

        def _get_stream_data(q):
            return [(doc.id, doc.to_dict() or {}) for doc in q.stream()]

        return await asyncio.to_thread(_get_stream_data, query)


# Global Firebase service instance
firebase_service = FirebaseService()
