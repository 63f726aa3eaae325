"""
Product review and question endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from storefront.dependencies import get_current_user, get_review_service, require_admin
from storefront.models import User
from storefront.schemas import QuestionAnswer, QuestionCreate, QuestionOut, ReviewCreate, ReviewOut
from storefront.services import ReviewService

router = APIRouter(prefix="/api/products", tags=["reviews"])


@router.get("/{product_id}/reviews", response_model=List[ReviewOut])
def list_reviews(product_id: int, reviews: ReviewService = Depends(get_review_service)):
    return reviews.list_reviews(product_id)


@router.post("/{product_id}/reviews", response_model=ReviewOut)
def add_review(
    product_id: int,
    data: ReviewCreate,
    user: Optional[User] = Depends(get_current_user),
    reviews: ReviewService = Depends(get_review_service),
):
    return reviews.add_review(product_id, data, user.id if user else None)


@router.get("/{product_id}/questions", response_model=List[QuestionOut])
def list_questions(product_id: int, reviews: ReviewService = Depends(get_review_service)):
    return reviews.list_questions(product_id)


@router.post("/{product_id}/questions", response_model=QuestionOut)
def ask_question(
    product_id: int,
    data: QuestionCreate,
    user: Optional[User] = Depends(get_current_user),
    reviews: ReviewService = Depends(get_review_service),
):
    return reviews.ask_question(product_id, data, user.id if user else None)


@router.put("/questions/{question_id}", response_model=QuestionOut, dependencies=[Depends(require_admin)])
def answer_question(question_id: int, data: QuestionAnswer, reviews: ReviewService = Depends(get_review_service)):
    return reviews.answer_question(question_id, data)
