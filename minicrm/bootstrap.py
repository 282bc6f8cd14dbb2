"""Service wiring for minicrm.

Builds every collaborator once from a single Settings object, so nothing
is held in module-level singletons.

Example usage:

    from minicrm.bootstrap import build_services

    services = build_services()

    await services.customers.add_customer({"name": "Asha", "spend": "12000", "visits": "2"})
    campaign = await services.orchestrator.create_campaign(
        "High spenders",
        [{"field": "spend", "operator": ">", "value": "10000"}],
        wait=True,
    )
    await services.simulator.run(campaign.id)
    snapshot = await services.reporter.snapshot(campaign.id)
"""

from dataclasses import dataclass

from minicrm.campaigns.orchestrator import CampaignOrchestrator
from minicrm.campaigns.reporter import DeliveryStatusReporter
from minicrm.campaigns.store import CampaignStore
from minicrm.campaigns.stores.inmemory import InMemoryCampaignStore
from minicrm.config import get_settings
from minicrm.config.settings import Settings
from minicrm.customers.store import CustomerDirectory
from minicrm.customers.stores.inmemory import InMemoryCustomerDirectory
from minicrm.delivery.simulator import DeliverySimulator
from minicrm.observability.logging import get_logger, setup_logging
from minicrm.providers.llm import create_executor
from minicrm.segments.enums import UnknownFieldPolicy
from minicrm.segments.evaluator import RuleEvaluator
from minicrm.segments.resolver import SegmentResolver
from minicrm.suggestions.suggester import MessageSuggester

logger = get_logger(__name__)


@dataclass
class CRMServices:
    """All collaborators built from one Settings object."""

    settings: Settings
    customers: CustomerDirectory
    campaigns: CampaignStore
    resolver: SegmentResolver
    orchestrator: CampaignOrchestrator
    reporter: DeliveryStatusReporter
    suggester: MessageSuggester
    simulator: DeliverySimulator


def build_services(
    settings: Settings | None = None,
    customers: CustomerDirectory | None = None,
    campaigns: CampaignStore | None = None,
    configure_logging: bool = True,
) -> CRMServices:
    """Build the CRM services.

    Args:
        settings: Configuration (default: get_settings())
        customers: Customer directory (default: empty in-memory directory)
        campaigns: Campaign store (default: empty in-memory store)
        configure_logging: Apply the logging settings to structlog

    Returns:
        CRMServices sharing the same stores
    """
    settings = settings or get_settings()

    if configure_logging:
        log_config = settings.observability.logging
        setup_logging(
            level=log_config.level,
            format=log_config.format,
            redact_pii=log_config.redact_pii,
        )

    customer_directory = customers or InMemoryCustomerDirectory()
    campaign_store = campaigns or InMemoryCampaignStore()

    evaluator = RuleEvaluator(UnknownFieldPolicy(settings.segments.unknown_field_policy))
    resolver = SegmentResolver(evaluator)

    services = CRMServices(
        settings=settings,
        customers=customer_directory,
        campaigns=campaign_store,
        resolver=resolver,
        orchestrator=CampaignOrchestrator(
            customer_directory,
            campaign_store,
            resolver=resolver,
            config=settings.delivery,
        ),
        reporter=DeliveryStatusReporter(campaign_store),
        suggester=MessageSuggester(create_executor(settings.suggestions), settings.suggestions),
        simulator=DeliverySimulator.from_config(campaign_store, settings.simulation),
    )

    logger.info(
        "services_built",
        app_name=settings.app_name,
        batch_size=settings.delivery.batch_size,
        unknown_field_policy=settings.segments.unknown_field_policy,
        suggestion_model=settings.suggestions.model,
    )
    return services
