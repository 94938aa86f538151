from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from refahi.application.common.event_bus import EventBus
from refahi.application.facilities.commands.activate_facility import ActivateFacilityHandler
from refahi.application.facilities.commands.cancel_facility_request import (
    CancelFacilityRequestHandler,
)
from refahi.application.facilities.commands.change_cycle_status import (
    ActivateFacilityCycleHandler,
    CloseFacilityCycleHandler,
)
from refahi.application.facilities.commands.create_facility import CreateFacilityHandler
from refahi.application.facilities.commands.create_facility_cycle import (
    CreateFacilityCycleHandler,
)
from refahi.application.facilities.commands.create_facility_request import (
    CreateFacilityRequestHandler,
)
from refahi.application.facilities.commands.review_facility_request import (
    ApproveFacilityRequestHandler,
    RejectFacilityRequestHandler,
    StartFacilityRequestReviewHandler,
)
from refahi.application.facilities.queries.get_facilities import GetFacilitiesHandler
from refahi.application.facilities.queries.get_facility_cycles import GetFacilityCyclesHandler
from refahi.application.facilities.queries.get_facility_request import (
    GetFacilityRequestDetailHandler,
    GetMyFacilityRequestsHandler,
)
from refahi.application.finance.commands.cancel_bill import CancelBillHandler
from refahi.application.finance.commands.charge_wallet import ChargeWalletHandler
from refahi.application.finance.commands.complete_payment import CompletePaymentHandler
from refahi.application.finance.commands.create_bill import CreateBillHandler
from refahi.application.finance.commands.create_payment import CreatePaymentHandler
from refahi.application.finance.commands.fail_payment import FailPaymentHandler
from refahi.application.finance.commands.issue_bill import IssueBillHandler
from refahi.application.finance.commands.pay_bill_with_wallet import PayBillWithWalletHandler
from refahi.application.finance.consumers.finance_events import (
    CancelBillOnReservationExpired,
    DepositWalletChargeOnBillPaid,
    RefundCancelledReservation,
)
from refahi.application.finance.queries.get_bill import GetBillHandler
from refahi.application.finance.queries.get_user_bills import GetUserBillsHandler
from refahi.application.finance.queries.get_wallet import GetWalletHandler
from refahi.application.finance.queries.get_wallet_transactions import (
    GetWalletTransactionsHandler,
)
from refahi.application.identity.commands.refresh_token import RefreshTokenHandler
from refahi.application.identity.commands.send_otp import SendOtpHandler
from refahi.application.identity.commands.verify_otp import VerifyOtpHandler
from refahi.application.identity.queries.get_current_user import GetCurrentUserHandler
from refahi.application.membership.commands.register_member import RegisterMemberHandler
from refahi.application.membership.commands.update_member import UpdateMemberHandler
from refahi.application.membership.queries.get_member import (
    GetMemberByNationalCodeHandler,
    GetMemberHandler,
)
from refahi.application.membership.queries.list_members import ListMembersHandler
from refahi.application.membership.services.member_info_provider import MemberInfoProvider
from refahi.application.recreation.commands.add_guest import AddGuestHandler
from refahi.application.recreation.commands.add_tour_capacity import AddTourCapacityHandler
from refahi.application.recreation.commands.add_tour_pricing import AddTourPricingHandler
from refahi.application.recreation.commands.cancel_reservation import CancelReservationHandler
from refahi.application.recreation.commands.change_reservation_capacity import (
    ChangeReservationCapacityHandler,
)
from refahi.application.recreation.commands.close_tour_registration import (
    CloseTourRegistrationHandler,
)
from refahi.application.recreation.commands.create_tour import CreateTourHandler
from refahi.application.recreation.commands.expire_reservations import ExpireReservationsHandler
from refahi.application.recreation.commands.hold_reservation import HoldReservationHandler
from refahi.application.recreation.commands.initiate_payment import InitiatePaymentHandler
from refahi.application.recreation.commands.publish_tour import PublishTourHandler
from refahi.application.recreation.commands.reactivate_expired_reservation import (
    ReactivateExpiredReservationHandler,
)
from refahi.application.recreation.commands.remove_guest import RemoveGuestHandler
from refahi.application.recreation.commands.start_reservation import StartReservationHandler
from refahi.application.recreation.consumers.billing_events import (
    CancelReservationOnBillCancelled,
    ConfirmReservationOnBillPaid,
    LogReservationPaymentFailure,
)
from refahi.application.recreation.queries.get_reservation_detail import (
    GetReservationDetailHandler,
)
from refahi.application.recreation.queries.get_tour_detail import GetTourDetailHandler
from refahi.application.recreation.queries.get_tours import GetToursHandler
from refahi.application.recreation.queries.get_user_reservations import (
    GetUserReservationsHandler,
)
from refahi.application.recreation.services.reservation_guard import ReservationGuard
from refahi.application.surveying.commands.add_survey_question import AddSurveyQuestionHandler
from refahi.application.surveying.commands.answer_survey_question import (
    AnswerSurveyQuestionHandler,
)
from refahi.application.surveying.commands.change_survey_state import (
    ActivateSurveyHandler,
    CloseSurveyHandler,
)
from refahi.application.surveying.commands.create_survey import CreateSurveyHandler
from refahi.application.surveying.commands.finish_survey_response import (
    CancelSurveyResponseHandler,
    SubmitSurveyResponseHandler,
)
from refahi.application.surveying.commands.start_survey_response import (
    StartSurveyResponseHandler,
)
from refahi.application.surveying.queries.get_my_survey_responses import (
    GetMySurveyResponsesHandler,
)
from refahi.application.surveying.queries.get_surveys import (
    GetActiveSurveysHandler,
    GetSurveyHandler,
)
from refahi.config import get_settings
from refahi.domain.facilities.services.facility_eligibility_service import (
    FacilityEligibilityService,
)
from refahi.domain.membership.services.member_eligibility_service import (
    MemberEligibilityService,
)
from refahi.domain.recreation.services.reservation_pricing_service import (
    ReservationPricingService,
)
from refahi.infrastructure.common.unit_of_work import SqlAlchemyUnitOfWork
from refahi.infrastructure.facilities.repositories.facility_repositories import (
    FacilityCycleRepository,
    FacilityRepository,
    FacilityRequestRepository,
)
from refahi.infrastructure.finance.repositories.bill_repository import BillRepository
from refahi.infrastructure.finance.repositories.wallet_repository import WalletRepository
from refahi.infrastructure.identity.repositories.otp_challenge_repository import (
    OtpChallengeRepository,
)
from refahi.infrastructure.identity.repositories.user_repository import UserRepository
from refahi.infrastructure.identity.services.otp_service import generate_numeric_code
from refahi.infrastructure.identity.services.otp_service_adapter import OtpServiceAdapter
from refahi.infrastructure.identity.services.token_service_adapter import TokenServiceAdapter
from refahi.infrastructure.membership.repositories.member_repository import MemberRepository
from refahi.infrastructure.recreation.repositories.reservation_repository import (
    ReservationRepository,
)
from refahi.infrastructure.recreation.repositories.tour_repository import TourRepository
from refahi.infrastructure.recreation.services.billing_gateway import FinanceBillingGateway
from refahi.infrastructure.surveying.repositories.survey_repositories import (
    SurveyRepository,
    SurveyResponseRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)
    otp_code_generator = providers.Object(generate_numeric_code)

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    otp_challenge_repository = providers.Factory(OtpChallengeRepository, db=db)
    member_repository = providers.Factory(MemberRepository, db=db)
    tour_repository = providers.Factory(TourRepository, db=db)
    reservation_repository = providers.Factory(ReservationRepository, db=db)
    bill_repository = providers.Factory(BillRepository, db=db)
    wallet_repository = providers.Factory(WalletRepository, db=db)
    facility_repository = providers.Factory(FacilityRepository, db=db)
    facility_cycle_repository = providers.Factory(FacilityCycleRepository, db=db)
    facility_request_repository = providers.Factory(FacilityRequestRepository, db=db)
    survey_repository = providers.Factory(SurveyRepository, db=db)
    survey_response_repository = providers.Factory(SurveyResponseRepository, db=db)

    # Identity services
    otp_service = providers.Singleton(OtpServiceAdapter)
    token_service = providers.Singleton(TokenServiceAdapter)

    # Domain services (pure domain logic, no db)
    member_eligibility_service = providers.Factory(MemberEligibilityService)
    pricing_service = providers.Factory(ReservationPricingService)
    facility_eligibility_service = providers.Factory(FacilityEligibilityService)

    # Event consumers commit on their own unit of work, which does not dispatch further
    consumer_uow = providers.Factory(SqlAlchemyUnitOfWork, db=db)

    event_bus = providers.Factory(
        EventBus,
        handlers=providers.List(
            providers.Factory(
                ConfirmReservationOnBillPaid,
                reservation_repository=reservation_repository,
                uow=consumer_uow,
            ),
            providers.Factory(
                CancelReservationOnBillCancelled,
                reservation_repository=reservation_repository,
                uow=consumer_uow,
            ),
            providers.Factory(
                LogReservationPaymentFailure,
                reservation_repository=reservation_repository,
                uow=consumer_uow,
            ),
            providers.Factory(
                DepositWalletChargeOnBillPaid,
                wallet_repository=wallet_repository,
                uow=consumer_uow,
            ),
            providers.Factory(
                RefundCancelledReservation,
                bill_repository=bill_repository,
                wallet_repository=wallet_repository,
                uow=consumer_uow,
            ),
            providers.Factory(
                CancelBillOnReservationExpired,
                bill_repository=bill_repository,
                uow=consumer_uow,
            ),
        ),
    )

    uow = providers.Factory(SqlAlchemyUnitOfWork, db=db, event_bus=event_bus)

    member_info_provider = providers.Factory(
        MemberInfoProvider,
        member_repository=member_repository,
        eligibility_service=member_eligibility_service,
    )

    # Identity handlers
    send_otp_handler = providers.Factory(
        SendOtpHandler,
        challenge_repository=otp_challenge_repository,
        otp_service=otp_service,
        code_generator=otp_code_generator,
        uow=uow,
        settings=settings,
    )
    verify_otp_handler = providers.Factory(
        VerifyOtpHandler,
        challenge_repository=otp_challenge_repository,
        user_repository=user_repository,
        otp_service=otp_service,
        token_service=token_service,
        uow=uow,
        settings=settings,
    )
    refresh_token_handler = providers.Factory(
        RefreshTokenHandler,
        user_repository=user_repository,
        token_service=token_service,
    )
    get_current_user_handler = providers.Factory(
        GetCurrentUserHandler, user_repository=user_repository
    )

    # Membership handlers
    register_member_handler = providers.Factory(
        RegisterMemberHandler, member_repository=member_repository, uow=uow
    )
    update_member_handler = providers.Factory(
        UpdateMemberHandler, member_repository=member_repository, uow=uow
    )
    get_member_handler = providers.Factory(GetMemberHandler, member_repository=member_repository)
    get_member_by_national_code_handler = providers.Factory(
        GetMemberByNationalCodeHandler, member_repository=member_repository
    )
    list_members_handler = providers.Factory(
        ListMembersHandler, member_repository=member_repository
    )

    # Finance handlers
    create_bill_handler = providers.Factory(
        CreateBillHandler, bill_repository=bill_repository, uow=uow
    )
    issue_bill_handler = providers.Factory(
        IssueBillHandler, bill_repository=bill_repository, uow=uow
    )
    cancel_bill_handler = providers.Factory(
        CancelBillHandler, bill_repository=bill_repository, uow=uow
    )
    create_payment_handler = providers.Factory(
        CreatePaymentHandler, bill_repository=bill_repository, uow=uow
    )
    complete_payment_handler = providers.Factory(
        CompletePaymentHandler, bill_repository=bill_repository, uow=uow
    )
    fail_payment_handler = providers.Factory(
        FailPaymentHandler, bill_repository=bill_repository, uow=uow
    )
    charge_wallet_handler = providers.Factory(
        ChargeWalletHandler,
        bill_repository=bill_repository,
        wallet_repository=wallet_repository,
        uow=uow,
    )
    pay_bill_with_wallet_handler = providers.Factory(
        PayBillWithWalletHandler,
        bill_repository=bill_repository,
        wallet_repository=wallet_repository,
        uow=uow,
    )
    get_bill_handler = providers.Factory(GetBillHandler, bill_repository=bill_repository)
    get_user_bills_handler = providers.Factory(
        GetUserBillsHandler, bill_repository=bill_repository
    )
    get_wallet_handler = providers.Factory(
        GetWalletHandler, wallet_repository=wallet_repository, uow=uow
    )
    get_wallet_transactions_handler = providers.Factory(
        GetWalletTransactionsHandler, wallet_repository=wallet_repository
    )

    # Recreation services
    guard = providers.Factory(
        ReservationGuard,
        tour_repository=tour_repository,
        reservation_repository=reservation_repository,
        member_info_provider=member_info_provider,
    )
    billing_gateway = providers.Factory(
        FinanceBillingGateway,
        create_bill_handler=create_bill_handler,
        bill_repository=bill_repository,
    )

    # Recreation handlers
    create_tour_handler = providers.Factory(
        CreateTourHandler, tour_repository=tour_repository, uow=uow
    )
    add_tour_capacity_handler = providers.Factory(
        AddTourCapacityHandler, tour_repository=tour_repository, uow=uow
    )
    add_tour_pricing_handler = providers.Factory(
        AddTourPricingHandler, tour_repository=tour_repository, uow=uow
    )
    publish_tour_handler = providers.Factory(
        PublishTourHandler, tour_repository=tour_repository, uow=uow
    )
    close_tour_registration_handler = providers.Factory(
        CloseTourRegistrationHandler, tour_repository=tour_repository, uow=uow
    )
    start_reservation_handler = providers.Factory(
        StartReservationHandler,
        guard=guard,
        reservation_repository=reservation_repository,
        uow=uow,
    )
    add_guest_handler = providers.Factory(
        AddGuestHandler,
        guard=guard,
        reservation_repository=reservation_repository,
        member_info_provider=member_info_provider,
        pricing_service=pricing_service,
        uow=uow,
    )
    remove_guest_handler = providers.Factory(
        RemoveGuestHandler,
        guard=guard,
        reservation_repository=reservation_repository,
        uow=uow,
    )
    change_reservation_capacity_handler = providers.Factory(
        ChangeReservationCapacityHandler,
        guard=guard,
        reservation_repository=reservation_repository,
        uow=uow,
    )
    hold_reservation_handler = providers.Factory(
        HoldReservationHandler,
        guard=guard,
        reservation_repository=reservation_repository,
        pricing_service=pricing_service,
        uow=uow,
        settings=settings,
    )
    initiate_payment_handler = providers.Factory(
        InitiatePaymentHandler,
        guard=guard,
        reservation_repository=reservation_repository,
        billing_gateway=billing_gateway,
        uow=uow,
        settings=settings,
    )
    cancel_reservation_handler = providers.Factory(
        CancelReservationHandler,
        guard=guard,
        reservation_repository=reservation_repository,
        uow=uow,
        settings=settings,
    )
    reactivate_expired_reservation_handler = providers.Factory(
        ReactivateExpiredReservationHandler,
        guard=guard,
        reservation_repository=reservation_repository,
        uow=uow,
        settings=settings,
    )
    expire_reservations_handler = providers.Factory(
        ExpireReservationsHandler, reservation_repository=reservation_repository, uow=uow
    )
    get_tours_handler = providers.Factory(
        GetToursHandler,
        tour_repository=tour_repository,
        reservation_repository=reservation_repository,
    )
    get_tour_detail_handler = providers.Factory(
        GetTourDetailHandler,
        tour_repository=tour_repository,
        reservation_repository=reservation_repository,
    )
    get_reservation_detail_handler = providers.Factory(
        GetReservationDetailHandler,
        reservation_repository=reservation_repository,
        tour_repository=tour_repository,
    )
    get_user_reservations_handler = providers.Factory(
        GetUserReservationsHandler, reservation_repository=reservation_repository
    )

    # Facilities handlers
    create_facility_handler = providers.Factory(
        CreateFacilityHandler, facility_repository=facility_repository, uow=uow
    )
    activate_facility_handler = providers.Factory(
        ActivateFacilityHandler, facility_repository=facility_repository, uow=uow
    )
    create_facility_cycle_handler = providers.Factory(
        CreateFacilityCycleHandler,
        facility_repository=facility_repository,
        cycle_repository=facility_cycle_repository,
        uow=uow,
    )
    activate_facility_cycle_handler = providers.Factory(
        ActivateFacilityCycleHandler, cycle_repository=facility_cycle_repository, uow=uow
    )
    close_facility_cycle_handler = providers.Factory(
        CloseFacilityCycleHandler, cycle_repository=facility_cycle_repository, uow=uow
    )
    create_facility_request_handler = providers.Factory(
        CreateFacilityRequestHandler,
        facility_repository=facility_repository,
        cycle_repository=facility_cycle_repository,
        request_repository=facility_request_repository,
        member_info_provider=member_info_provider,
        eligibility_service=facility_eligibility_service,
        uow=uow,
    )
    start_facility_request_review_handler = providers.Factory(
        StartFacilityRequestReviewHandler,
        request_repository=facility_request_repository,
        uow=uow,
    )
    approve_facility_request_handler = providers.Factory(
        ApproveFacilityRequestHandler, request_repository=facility_request_repository, uow=uow
    )
    reject_facility_request_handler = providers.Factory(
        RejectFacilityRequestHandler, request_repository=facility_request_repository, uow=uow
    )
    cancel_facility_request_handler = providers.Factory(
        CancelFacilityRequestHandler, request_repository=facility_request_repository, uow=uow
    )
    get_facilities_handler = providers.Factory(
        GetFacilitiesHandler, facility_repository=facility_repository
    )
    get_facility_cycles_handler = providers.Factory(
        GetFacilityCyclesHandler,
        facility_repository=facility_repository,
        cycle_repository=facility_cycle_repository,
        request_repository=facility_request_repository,
    )
    get_facility_request_detail_handler = providers.Factory(
        GetFacilityRequestDetailHandler, request_repository=facility_request_repository
    )
    get_my_facility_requests_handler = providers.Factory(
        GetMyFacilityRequestsHandler, request_repository=facility_request_repository
    )

    # Surveying handlers
    create_survey_handler = providers.Factory(
        CreateSurveyHandler, survey_repository=survey_repository, uow=uow
    )
    add_survey_question_handler = providers.Factory(
        AddSurveyQuestionHandler, survey_repository=survey_repository, uow=uow
    )
    activate_survey_handler = providers.Factory(
        ActivateSurveyHandler, survey_repository=survey_repository, uow=uow
    )
    close_survey_handler = providers.Factory(
        CloseSurveyHandler, survey_repository=survey_repository, uow=uow
    )
    start_survey_response_handler = providers.Factory(
        StartSurveyResponseHandler,
        survey_repository=survey_repository,
        response_repository=survey_response_repository,
        uow=uow,
    )
    answer_survey_question_handler = providers.Factory(
        AnswerSurveyQuestionHandler,
        survey_repository=survey_repository,
        response_repository=survey_response_repository,
        uow=uow,
    )
    submit_survey_response_handler = providers.Factory(
        SubmitSurveyResponseHandler,
        survey_repository=survey_repository,
        response_repository=survey_response_repository,
        uow=uow,
    )
    cancel_survey_response_handler = providers.Factory(
        CancelSurveyResponseHandler, response_repository=survey_response_repository, uow=uow
    )
    get_active_surveys_handler = providers.Factory(
        GetActiveSurveysHandler, survey_repository=survey_repository
    )
    get_survey_handler = providers.Factory(GetSurveyHandler, survey_repository=survey_repository)
    get_my_survey_responses_handler = providers.Factory(
        GetMySurveyResponsesHandler, response_repository=survey_response_repository
    )


# Initialize container
container = Container()
