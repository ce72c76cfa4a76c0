"""
Store Factory
Centralizes the logic for selecting the item store adapter and wiring services.
"""

import random

from vocabb.application.config import AppConfig
from vocabb.application.quiz import QuizEngine
from vocabb.application.study_service import QuizService, ReviewService
from vocabb.domain.ports import ItemStore
from vocabb.infrastructure.store import InMemoryItemStore, YamlItemStore


def get_item_store(config: AppConfig) -> ItemStore:
    """
    Returns the ItemStore implementation selected by config.
    """
    if config.backend == "memory":
        return InMemoryItemStore()
    return YamlItemStore(config.store_path)


def get_review_service(config: AppConfig, store: ItemStore) -> ReviewService:
    return ReviewService(store, buffer_seconds=config.due_buffer_seconds)


def get_quiz_service(config: AppConfig, store: ItemStore) -> QuizService:
    engine = QuizEngine(rng=random.Random(config.seed), question_limit=config.quiz_length)
    return QuizService(store, engine=engine)
