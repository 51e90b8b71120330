"""Structured shape of the JSON object Gemini is asked to return.

Every field is optional: the model decides what it fills in, and the prompts
for the different variants ask for slightly different keys.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _ReplyModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class Segment(_ReplyModel):
    timestamp: Optional[str] = None
    end: Optional[str] = None
    text: Optional[str] = None


class Participant(_ReplyModel):
    name: Optional[str] = None
    user_id: Optional[str] = Field(None, alias="userId")
    verified: Optional[bool] = None
    join_time: Optional[str] = Field(None, alias="joinTime")
    leave_time: Optional[str] = Field(None, alias="leaveTime")
    presence_duration: Optional[str] = Field(None, alias="presenceDuration")
    speaking_time: Optional[str] = Field(None, alias="speakingTime")
    sentiment: Optional[str] = None
    emotion: Optional[str] = None
    engagement_score: Optional[float] = Field(None, alias="engagementScore")
    summary: Optional[str] = None
    segments: List[Segment] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return self.name or self.user_id or "Unknown Speaker"


class Topic(_ReplyModel):
    name: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    summary: Optional[str] = None


class KeyMoment(_ReplyModel):
    timestamp: Optional[str] = None
    description: Optional[str] = None


class MeetingAnalysis(_ReplyModel):
    transcript: Optional[str] = None
    analytics: Optional[str] = None
    summary: Optional[str] = None
    meeting_summary: Optional[str] = Field(None, alias="meetingSummary")
    overall_sentiment: Optional[str] = Field(None, alias="overallSentiment")
    participants: List[Participant] = Field(default_factory=list)
    topics: List[Union[str, Topic]] = Field(default_factory=list)
    decisions: List[str] = Field(default_factory=list)
    action_items: List[str] = Field(default_factory=list, alias="actionItems")
    key_moments: List[KeyMoment] = Field(default_factory=list, alias="keyMoments")

    @property
    def headline(self) -> Optional[str]:
        return self.meeting_summary or self.summary

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
