from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vidtube.api.deps import PageParams, get_current_user, get_db, get_page_params
from vidtube.core.result import unwrap
from vidtube.schemas.tweets import (
    TweetCreateRequest,
    TweetListResponse,
    TweetResponse,
    TweetUpdateRequest,
)
from vidtube.schemas.users import AuthenticatedUser, MessageResponse
from vidtube.services.tweet_service import TweetService


router = APIRouter(prefix="/tweets", tags=["Tweets"])


def to_list_response(page) -> TweetListResponse:
    return TweetListResponse(
        tweets=[TweetResponse.model_validate(t) for t in page.items],
        current_page=page.page,
        total_pages=page.total_pages,
        total_tweets=page.total,
    )


@router.post("", response_model=TweetResponse, status_code=status.HTTP_201_CREATED)
def create_tweet(
    data: TweetCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    tweet = unwrap(TweetService.create_tweet(db, current_user.id, data.content))
    return TweetResponse.model_validate(tweet)


@router.get("", response_model=TweetListResponse)
def list_tweets(
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
):
    return to_list_response(TweetService.list_tweets(db, paging.page, paging.limit))


@router.get("/user/{user_id}", response_model=TweetListResponse)
def get_user_tweets(
    user_id: str,
    paging: PageParams = Depends(get_page_params),
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return to_list_response(unwrap(TweetService.list_user_tweets(db, user_id, paging.page, paging.limit)))


@router.patch("/{tweet_id}", response_model=TweetResponse)
def update_tweet(
    tweet_id: str,
    data: TweetUpdateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    tweet = unwrap(TweetService.update_tweet(db, tweet_id, current_user.id, data.content))
    return TweetResponse.model_validate(tweet)


@router.delete("/{tweet_id}", response_model=MessageResponse)
def delete_tweet(
    tweet_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    unwrap(TweetService.delete_tweet(db, tweet_id, current_user.id))
    return MessageResponse(message="Tweet deleted successfully")
