from dependency_injector import containers, providers

container = None

def setup_di_container_from_settings(settings):  # noqa: PLR0915
    """Inicializa o DI container após o Django já estar com settings carregados."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    from zoneinfo import ZoneInfo

    import structlog

    # API clients
    from labora_core.adapters.api_clients.auth_api_client import AuthAPIClient
    from labora_core.adapters.api_clients.store_api_client import StoreAPIClient
    from labora_core.adapters.observability.event_subscribers import register_metric_subscribers

    # Implementações concretas de repositórios
    from labora_core.adapters.repositories.client_repo_impl import ClientRepoImpl
    from labora_core.adapters.repositories.quote_repo_impl import QuoteRepoImpl
    from labora_core.adapters.repositories.service_catalog_repo_impl import ServiceCatalogRepoImpl

    # Commands
    from labora_core.core.application.commands.client_commands import CreateClientCommand, UpdateClientCommand
    from labora_core.core.application.commands.quote_commands import (
        ApproveQuoteCommand,
        CreateQuoteCommand,
        RejectQuoteCommand,
        UpdateQuoteCommand,
    )

    # CQRS buses
    from labora_core.core.application.cqrs import CommandBusImpl, QueryBusImpl

    # Handlers
    from labora_core.core.application.handlers.catalog_handlers import (
        GetServiceHandler,
        ListServiceCategoriesHandler,
        ListServicesHandler,
    )
    from labora_core.core.application.handlers.client_handlers import (
        CreateClientHandler,
        GetClientHandler,
        ListClientsHandler,
        SearchClientsHandler,
        UpdateClientHandler,
    )
    from labora_core.core.application.handlers.dashboard_handlers import GetDashboardSummaryHandler
    from labora_core.core.application.handlers.document_handlers import (
        RenderContractPdfHandler,
        RenderContractTextHandler,
        RenderQuotePdfHandler,
    )
    from labora_core.core.application.handlers.quote_handlers import (
        ApproveQuoteHandler,
        CreateQuoteHandler,
        GetQuoteHandler,
        ListQuotesHandler,
        RejectQuoteHandler,
        SearchApprovedQuotesHandler,
        UpdateQuoteHandler,
    )

    # Queries
    from labora_core.core.application.queries.catalog_queries import (
        GetServiceQuery,
        ListServiceCategoriesQuery,
        ListServicesQuery,
    )
    from labora_core.core.application.queries.client_queries import (
        GetClientQuery,
        ListClientsQuery,
        SearchClientsQuery,
    )
    from labora_core.core.application.queries.dashboard_queries import GetDashboardSummaryQuery
    from labora_core.core.application.queries.document_queries import (
        RenderContractPdfQuery,
        RenderContractTextQuery,
        RenderQuotePdfQuery,
    )
    from labora_core.core.application.queries.quote_queries import (
        GetQuoteQuery,
        ListQuotesQuery,
        SearchApprovedQuotesQuery,
    )

    # Serviços de negócio
    from labora_core.core.application.services.auth_service import AuthService
    from labora_core.core.application.services.document_export_service import DocumentExportService
    from labora_core.core.application.services.document_template_service import DocumentTemplateService
    from labora_core.core.application.services.quote_lifecycle_service import QuoteLifecycleService
    from labora_core.core.application.services.utils.formatters import BrazilianFormatter

    # ─────────────────────────────────────────────────────────
    # Construção do container DI
    # ─────────────────────────────────────────────────────────
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # Infra & integração
        logger           = providers.Singleton(structlog.get_logger)
        event_dispatcher = providers.Singleton(
            'labora_core.core.domain.services.event_dispatcher.EventDispatcher'
        )

        # CQRS
        command_bus = providers.Singleton(CommandBusImpl, dispatcher=event_dispatcher)
        query_bus   = providers.Singleton(QueryBusImpl)

        # API clients
        store_client = providers.Singleton(
            StoreAPIClient,
            base_url=config.store.url,
            api_key=config.store.anon_key,
            timeout=config.store.timeout,
            retries=config.store.retries,
        )
        auth_client = providers.Singleton(
            AuthAPIClient,
            base_url=config.store.url,
            api_key=config.store.anon_key,
            timeout=config.store.timeout,
            retries=config.store.retries,
        )

        # Implementações de Repositórios
        client_repo  = providers.Singleton(ClientRepoImpl, store=store_client)
        quote_repo   = providers.Singleton(QuoteRepoImpl, store=store_client)
        catalog_repo = providers.Singleton(ServiceCatalogRepoImpl, store=store_client)

        # Serviços de negócio
        formatter_service = providers.Singleton(BrazilianFormatter, currency_symbol="R$")
        time_zone         = providers.Singleton(ZoneInfo, config.time_zone)
        lifecycle_service = providers.Singleton(QuoteLifecycleService, repo=quote_repo)
        template_service  = providers.Singleton(DocumentTemplateService, formatter=formatter_service)
        export_service    = providers.Singleton(DocumentExportService, logo_path=config.logo_path)
        auth_service      = providers.Singleton(
            AuthService,
            gateway=auth_client,
            redirect_url=config.auth.redirect_to,
        )

        # Handlers de comandos
        create_client_handler = providers.Factory(CreateClientHandler, repo=client_repo)
        update_client_handler = providers.Factory(UpdateClientHandler, repo=client_repo)
        create_quote_handler  = providers.Factory(CreateQuoteHandler,  repo=quote_repo, catalog_repo=catalog_repo)
        update_quote_handler  = providers.Factory(UpdateQuoteHandler,  repo=quote_repo)
        approve_quote_handler = providers.Factory(ApproveQuoteHandler, lifecycle=lifecycle_service)
        reject_quote_handler  = providers.Factory(RejectQuoteHandler,  lifecycle=lifecycle_service)

        # Handlers de queries
        get_client_handler      = providers.Factory(GetClientHandler,      repo=client_repo)
        list_clients_handler    = providers.Factory(ListClientsHandler,    repo=client_repo)
        search_clients_handler  = providers.Factory(SearchClientsHandler,  repo=client_repo)
        get_quote_handler       = providers.Factory(GetQuoteHandler,       repo=quote_repo)
        list_quotes_handler     = providers.Factory(ListQuotesHandler,     repo=quote_repo)
        search_approved_handler = providers.Factory(SearchApprovedQuotesHandler, repo=quote_repo)
        list_categories_handler = providers.Factory(ListServiceCategoriesHandler, repo=catalog_repo)
        list_services_handler   = providers.Factory(ListServicesHandler,   repo=catalog_repo)
        get_service_handler     = providers.Factory(GetServiceHandler,     repo=catalog_repo)
        dashboard_handler       = providers.Singleton(
            GetDashboardSummaryHandler,
            quote_repo=quote_repo,
            formatter=formatter_service,
            tz=time_zone,
        )
        quote_pdf_handler = providers.Factory(
            RenderQuotePdfHandler,
            repo=quote_repo,
            templates=template_service,
            exporter=export_service,
        )
        contract_text_handler = providers.Factory(
            RenderContractTextHandler,
            repo=quote_repo,
            templates=template_service,
            exporter=export_service,
        )
        contract_pdf_handler = providers.Factory(
            RenderContractPdfHandler,
            repo=quote_repo,
            templates=template_service,
            exporter=export_service,
        )

        def init(self):
            register_metric_subscribers(self.event_dispatcher())

            # Bus de comandos
            cmd_bus = self.command_bus()
            cmd_bus.register(CreateClientCommand, self.create_client_handler())
            cmd_bus.register(UpdateClientCommand, self.update_client_handler())
            cmd_bus.register(CreateQuoteCommand, self.create_quote_handler())
            cmd_bus.register(UpdateQuoteCommand, self.update_quote_handler())
            cmd_bus.register(ApproveQuoteCommand, self.approve_quote_handler())
            cmd_bus.register(RejectQuoteCommand, self.reject_quote_handler())

            # Bus de queries
            qry_bus = self.query_bus()
            qry_bus.register(GetClientQuery, self.get_client_handler())
            qry_bus.register(ListClientsQuery, self.list_clients_handler())
            qry_bus.register(SearchClientsQuery, self.search_clients_handler())
            qry_bus.register(GetQuoteQuery, self.get_quote_handler())
            qry_bus.register(ListQuotesQuery, self.list_quotes_handler())
            qry_bus.register(SearchApprovedQuotesQuery, self.search_approved_handler())
            qry_bus.register(ListServiceCategoriesQuery, self.list_categories_handler())
            qry_bus.register(ListServicesQuery, self.list_services_handler())
            qry_bus.register(GetServiceQuery, self.get_service_handler())
            qry_bus.register(GetDashboardSummaryQuery, self.dashboard_handler())
            qry_bus.register(RenderQuotePdfQuery, self.quote_pdf_handler())
            qry_bus.register(RenderContractTextQuery, self.contract_text_handler())
            qry_bus.register(RenderContractPdfQuery, self.contract_pdf_handler())

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.store.url.from_value(settings.SUPABASE_URL)
    container.config.store.anon_key.from_value(settings.SUPABASE_ANON_KEY)
    container.config.store.timeout.from_value(settings.SUPABASE_TIMEOUT)
    container.config.store.retries.from_value(settings.SUPABASE_RETRIES)
    container.config.auth.redirect_to.from_value(settings.AUTH_EMAIL_REDIRECT_TO)
    container.config.logo_path.from_value(settings.LOGO_PATH)
    container.config.time_zone.from_value(settings.TIME_ZONE)
    Container.init(container)
    return container
