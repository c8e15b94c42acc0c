from cmisclient.helper.HelperConfig import HelperConfig
from cmisclient.clients.cmis.CMISClientInterface import CMISClientInterface
from cmisclient.clients.cmis.TypeDefinitionCache import InMemoryTypeDefinitionCache, TypeDefinitionCacheInterface


class CMISClientManager:
    """
    Manager class to handle multiple CMIS binding clients based on configuration.
    """

    def __init__(self, helper_config: HelperConfig, type_cache: TypeDefinitionCacheInterface | None = None):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        # all clients share one type cache
        self.type_cache = type_cache or InMemoryTypeDefinitionCache()
        self.clients = self._initialize_clients()

    def _get_bindings_from_env(self) -> list[str]:
        """
        Reads the list of CMIS bindings from ENV configuration.

        Returns:
            list[str]: A list of binding names, e.g. ["Browser"].

        Raises:
            ValueError: If no CMIS bindings are specified in the configuration.
        """
        bindings = self.helper_config.get_list_val("CMIS_BINDINGS", default=["browser"])
        if not bindings:
            raise ValueError("No CMIS bindings specified in configuration.")

        # lowercase all and uppercase first letter for comparison and display
        bindings = [binding.strip().lower() for binding in bindings]
        bindings = [binding.capitalize() for binding in bindings]
        return bindings

    def _initialize_clients(self) -> list[CMISClientInterface]:
        """
        Initializes CMIS clients based on the bindings specified in the configuration.

        Returns:
            list[CMISClientInterface]: A list of instances of CMIS clients that implement the CMISClientInterface.

        Raises:
            ValueError: If a binding is unsupported or no client could be instantiated.
        """
        clients = []
        for binding in self._get_bindings_from_env():
            className = f"CMISClient{binding}"
            # try to import the class from cmisclient.clients.cmis.{binding}
            try:
                module = __import__(
                    f"cmisclient.clients.cmis.{binding.lower()}.{className}",
                    fromlist=[className],
                )
                client_class = getattr(module, className)
            except (ImportError, AttributeError) as e:
                raise ValueError(f"Unsupported CMIS binding specified: '{binding}'. Error: {e}")
            clients.append(client_class(helper_config=self.helper_config, type_cache=self.type_cache))
            self.logging.debug("Instantiated CMIS client for binding: %s", binding)
        if not clients:
            raise ValueError("No valid CMIS clients could be instantiated from the specified bindings.")
        return clients

    def get_clients(self) -> list[CMISClientInterface]:
        """
        Returns the list of instantiated CMIS clients.
        """
        return self.clients

    def get_client(self, binding: str) -> CMISClientInterface:
        """
        Returns the client of one binding.

        Raises:
            ValueError: If no client for the binding is configured.
        """
        for client in self.clients:
            if client.get_engine_name() == binding.strip().lower():
                return client
        raise ValueError(f"No CMIS client configured for binding '{binding}'.")
