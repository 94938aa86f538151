"""Repositories for surveys and survey responses."""

import logging
from datetime import datetime

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session, selectinload

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import NationalId, SurveyId, SurveyResponseId
from refahi.domain.surveying.entities.survey import Survey
from refahi.domain.surveying.entities.survey_response import SurveyResponse
from refahi.domain.surveying.enums import SurveyState
from refahi.exceptions import SurveyNotFoundError, SurveyResponseNotFoundError
from refahi.infrastructure.surveying.mappers.survey_mappers import (
    SurveyMapper,
    SurveyResponseMapper,
)
from refahi.models import Survey as SurveyORM
from refahi.models import SurveyQuestion as SurveyQuestionORM
from refahi.models import SurveyResponse as SurveyResponseORM

logger = logging.getLogger(__name__)


class SurveyRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = SurveyMapper()

    def _page(self, stmt: Select, pagination: Pagination) -> tuple[list[Survey], int]:
        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        stmt = (
            stmt.options(selectinload(SurveyORM.questions).selectinload(SurveyQuestionORM.options))
            .order_by(SurveyORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()], total

    def find_by_id(self, survey_id: SurveyId) -> Survey | None:
        orm_model = self.db.get(SurveyORM, survey_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_accepting(self, now: datetime, pagination: Pagination) -> tuple[list[Survey], int]:
        stmt = select(SurveyORM).where(
            SurveyORM.state == SurveyState.ACTIVE.value,
            or_(SurveyORM.start_at.is_(None), SurveyORM.start_at <= now),
            or_(SurveyORM.end_at.is_(None), SurveyORM.end_at >= now),
        )
        return self._page(stmt, pagination)

    def find_all(
        self, pagination: Pagination, state: SurveyState | None = None
    ) -> tuple[list[Survey], int]:
        stmt = select(SurveyORM)
        if state is not None:
            stmt = stmt.where(SurveyORM.state == state.value)
        return self._page(stmt, pagination)

    def save(self, survey: Survey) -> Survey:
        if survey.id.value == 0:
            orm_model = self.mapper.to_orm(survey)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(SurveyORM, survey.id.value)
            if orm_model is None:
                raise SurveyNotFoundError(survey.id.value)
            self.mapper.to_orm(survey, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved survey {orm_model.id}")
        return self.mapper.to_domain(orm_model)


class SurveyResponseRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = SurveyResponseMapper()

    def find_by_id(self, response_id: SurveyResponseId) -> SurveyResponse | None:
        orm_model = self.db.get(SurveyResponseORM, response_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_attempts(
        self, survey_id: SurveyId, national_code: NationalId
    ) -> list[SurveyResponse]:
        stmt = (
            select(SurveyResponseORM)
            .where(
                SurveyResponseORM.survey_id == survey_id.value,
                SurveyResponseORM.participant_national_code == national_code.value,
            )
            .order_by(SurveyResponseORM.attempt_number)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def find_by_participant(
        self, national_code: NationalId, pagination: Pagination
    ) -> tuple[list[SurveyResponse], int]:
        stmt = select(SurveyResponseORM).where(
            SurveyResponseORM.participant_national_code == national_code.value
        )
        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        stmt = (
            stmt.options(selectinload(SurveyResponseORM.answers))
            .order_by(SurveyResponseORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()], total

    def save(self, response: SurveyResponse) -> SurveyResponse:
        if response.id.value == 0:
            orm_model = self.mapper.to_orm(response)
            self.db.add(orm_model)
        else:
            orm_model = self.db.get(SurveyResponseORM, response.id.value)
            if orm_model is None:
                raise SurveyResponseNotFoundError(response.id.value)
            self.mapper.to_orm(response, orm_model)
        self.db.flush()
        self.db.refresh(orm_model)
        logger.debug(f"Saved survey response {orm_model.id}")
        return self.mapper.to_domain(orm_model)
