import asyncio
import logging
import threading
from typing import Self

from dbus_next.aio.message_bus import MessageBus
from dbus_next.constants import BusType
from dbus_next.errors import DBusError

from unitctl.dbus.constants import ConnectionConfig, DBusConstants


class DBusConnectionManager:
    """Manages one D-Bus connection per bus type with reconnection.

    Use get_instance() to share a connection between callers.
    """

    _instances: dict[BusType, 'DBusConnectionManager'] = {}
    _instances_lock = threading.Lock()

    def __init__(
        self,
        bus_type: BusType = BusType.SYSTEM,
        max_retries: int = ConnectionConfig.DEFAULT_MAX_RETRIES,
        initial_backoff: float = ConnectionConfig.DEFAULT_INITIAL_BACKOFF,
    ) -> None:
        """
        Initializes the DBusConnectionManager.

        Args:
            bus_type: The D-Bus bus type to connect to.
            max_retries: The maximum number of connection attempts.
            initial_backoff: The initial backoff delay in seconds for retries.
        """
        self._logger = logging.getLogger(__name__)

        self._bus_type = bus_type
        self._bus: MessageBus | None = None
        self._max_retries = max_retries
        self._initial_backoff = initial_backoff
        self._connection_lock = asyncio.Lock()

    @classmethod
    def get_instance(cls, bus_type: BusType = BusType.SYSTEM) -> Self:
        """Returns the shared connection manager for a bus type.
        """
        if bus_type not in cls._instances:
            with cls._instances_lock:
                if bus_type not in cls._instances:
                    cls._instances[bus_type] = cls(bus_type)
        return cls._instances[bus_type]  # type: ignore[return-value]

    @property
    def bus_type(self) -> BusType:
        return self._bus_type

    async def connect(self) -> None:
        """Connects to the D-Bus with an exponential backoff retry mechanism.
        """
        async with self._connection_lock:
            if self._is_already_connected():
                self._logger.debug('Already connected to D-Bus.')
                return

            await self._attempt_connection_with_retry()

    def _is_already_connected(self) -> bool:
        return self._bus is not None and self._bus.connected

    async def _attempt_connection_with_retry(self) -> None:
        retries = 0
        backoff = self._initial_backoff

        while retries < self._max_retries:
            if await self._try_single_connection_attempt(retries + 1):
                return

            retries += 1
            if retries < self._max_retries:
                self._logger.info('Retrying in %.2f seconds.', backoff)
                await asyncio.sleep(backoff)
                backoff *= ConnectionConfig.BACKOFF_MULTIPLIER

        self._logger.critical(
            'Could not connect to the %s bus after %d attempts.',
            self._bus_type.name.lower(),
            self._max_retries,
        )
        raise ConnectionError(
            f'Failed to connect to D-Bus after {self._max_retries} attempts.'
        )

    async def _try_single_connection_attempt(
        self,
        attempt_number: int,
    ) -> bool:
        """Try a single connection attempt.

        Args:
            attempt_number: The current attempt number for logging.

        Returns:
            True if connection was successful, False otherwise.
        """
        try:
            self._logger.info(
                'Attempting to connect to the %s bus (attempt %d/%d)...',
                self._bus_type.name.lower(),
                attempt_number,
                self._max_retries,
            )
            self._bus = await MessageBus(bus_type=self._bus_type).connect()
            self._logger.info('Successfully connected to D-Bus.')
            return True
        except (DBusError, OSError) as e:
            self._logger.warning('Failed to connect to D-Bus: %s', e)
            return False

    async def disconnect(self) -> None:
        """Disconnects from the D-Bus if connected.
        """
        async with self._connection_lock:
            if self._bus:
                self._logger.info('Disconnecting from D-Bus.')
                self._bus.disconnect()
                self._bus = None

    async def get_bus(self) -> MessageBus:
        """Returns the MessageBus object, ensuring a connection is established.

        Raises:
            ConnectionError: If a connection cannot be established.
        """
        if not await self.health_check():
            self._logger.debug('D-Bus connection is down. Connecting.')
            await self.connect()

        if not self._bus:
            raise ConnectionError('Failed to get a valid D-Bus connection.')

        return self._bus

    async def health_check(self) -> bool:
        """Verifies the D-Bus connection is responsive.
        """
        if not self._is_already_connected():
            return False

        try:
            introspection = await self._bus.introspect(  # type: ignore
                DBusConstants.SERVICE_NAME,
                DBusConstants.OBJECT_PATH,
            )
            proxy = self._bus.get_proxy_object(  # type: ignore
                DBusConstants.SERVICE_NAME,
                DBusConstants.OBJECT_PATH,
                introspection,
            )
            interface = proxy.get_interface(DBusConstants.INTERFACE)
            await interface.call_get_id()  # type: ignore
            return True
        except DBusError as e:
            self._logger.warning('D-Bus health check failed: %s', e)
            return False
