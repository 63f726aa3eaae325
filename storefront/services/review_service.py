"""
Product reviews and shopper questions
"""
from datetime import datetime, timezone
from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

from storefront.exceptions import NotFoundError
from storefront.models import ProductQuestion, ProductReview
from storefront.schemas import QuestionAnswer, QuestionCreate, ReviewCreate
from storefront.services.catalog_service import CatalogService


class ReviewService:
    def __init__(self, db: Session):
        self.db = db
        self.catalog = CatalogService(db)

    def list_reviews(self, product_id: int) -> List[ProductReview]:
        return (
            self.db.query(ProductReview)
            .filter(ProductReview.product_id == product_id)
            .order_by(ProductReview.created_at.desc(), ProductReview.id.desc())
            .all()
        )

    def add_review(self, product_id: int, data: ReviewCreate, user_id: Optional[int] = None) -> ProductReview:
        self.catalog.get_product(product_id)
        review = ProductReview(product_id=product_id, user_id=user_id, **data.model_dump())
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        logger.info(f"Review added: {review}")
        return review

    def list_questions(self, product_id: int) -> List[ProductQuestion]:
        return (
            self.db.query(ProductQuestion)
            .filter(ProductQuestion.product_id == product_id, ProductQuestion.is_public.is_(True))
            .order_by(ProductQuestion.created_at.desc(), ProductQuestion.id.desc())
            .all()
        )

    def ask_question(self, product_id: int, data: QuestionCreate, user_id: Optional[int] = None) -> ProductQuestion:
        self.catalog.get_product(product_id)
        question = ProductQuestion(product_id=product_id, user_id=user_id, is_public=True, **data.model_dump())
        self.db.add(question)
        self.db.commit()
        self.db.refresh(question)
        logger.info(f"Question asked: {question}")
        return question

    def answer_question(self, question_id: int, data: QuestionAnswer) -> ProductQuestion:
        question = self.db.get(ProductQuestion, question_id)
        if question is None:
            raise NotFoundError("Question not found")

        if data.answer is not None:
            question.answer = data.answer
            question.answered_at = datetime.now(timezone.utc)
        if data.answered_by is not None:
            question.answered_by = data.answered_by
        if data.is_public is not None:
            question.is_public = data.is_public

        self.db.commit()
        self.db.refresh(question)
        logger.info(f"Question answered: {question}")
        return question
