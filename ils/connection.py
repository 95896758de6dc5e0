"""
Connection to the Integrated Library System (ILS).

Wraps the configured driver and answers the two questions the account area
asks before showing ILS-backed pages: does the driver support a method
(`check_capability`), and is a multi-step ILS function such as storage
retrieval requests fully set up (`check_function`).
"""

import logging
from typing import Any, Callable, Dict, Optional, Union

from core.settings_loader import get_catalog_config, get_driver_config
from ils.drivers import AbstractDriver, DemoDriver, IlsError, NoILSDriver

logger = logging.getLogger(__name__)

DRIVERS: Dict[str, Callable[..., AbstractDriver]] = {
    "Demo": DemoDriver,
    "NoILS": NoILSDriver,
}


class IlsConnection:
    def __init__(self, driver_name: str, driver_config: Optional[Dict[str, Any]] = None,
                 data_folder: Optional[str] = None):
        self.driver_name = driver_name
        self.driver_config = driver_config or {}
        self.data_folder = data_folder
        self._driver: Optional[AbstractDriver] = None
        self._failing = False

    @classmethod
    def from_settings(cls, data_folder: Optional[str] = None) -> "IlsConnection":
        """Build a connection for the driver named in the [Catalog] section."""
        driver_name = get_catalog_config().get("driver", "NoILS")
        return cls(driver_name, get_driver_config(driver_name), data_folder)

    def get_driver(self) -> AbstractDriver:
        """Return the initialized driver, building it on first use."""
        if self._failing:
            raise IlsError(f"ILS driver {self.driver_name} failed to initialize")
        if self._driver is None:
            driver_class = DRIVERS.get(self.driver_name)
            try:
                if driver_class is None:
                    raise IlsError(f"Unknown ILS driver: {self.driver_name}")
                if driver_class is DemoDriver:
                    driver = DemoDriver(self.driver_config, data_folder=self.data_folder)
                else:
                    driver = driver_class(self.driver_config)
                driver.init()
            except IlsError as e:
                self._failing = True
                logger.error(f"ILS driver initialization failed: {e}")
                raise
            self._driver = driver
        return self._driver

    def get_offline_mode(self) -> Union[str, bool]:
        """
        Return "ils-offline", "ils-none" or False when the ILS is online.

        A driver that fails to initialize is reported as "ils-offline".
        """
        try:
            driver = self.get_driver()
        except IlsError:
            return "ils-offline"
        if isinstance(driver, NoILSDriver):
            return driver.get_offline_mode()
        return False

    def check_capability(self, method: str, params: Optional[Dict[str, Any]] = None) -> bool:
        try:
            return self.get_driver().supports_method(method, params or {})
        except IlsError as e:
            logger.warning(f"Capability check for {method} failed: {e}")
            return False

    def check_function(self, function: str, params: Optional[Dict[str, Any]] = None) -> Union[Dict[str, Any], bool]:
        """
        Check whether an ILS function is configured and fully supported.

        Returns the function's configuration block when it is, False otherwise.
        """
        checker = self._function_checks().get(function)
        if checker is None:
            logger.warning(f"No availability check defined for ILS function {function}")
            return False
        params = params or {}
        try:
            function_config = self.get_driver().get_config(self._config_section(function), params)
            if not function_config:
                return False
            return checker(function_config, params)
        except IlsError as e:
            logger.warning(f"Function check for {function} failed: {e}")
            return False

    def call(self, method: str, *args, **kwargs):
        """Invoke a supported driver method."""
        driver = self.get_driver()
        if not driver.supports_method(method):
            raise IlsError(f"Cannot call method: {self.driver_name}::{method}")
        return getattr(driver, method)(*args, **kwargs)

    # --- Function checks ---

    def _function_checks(self):
        return {
            "transaction_history": self._check_transaction_history,
            "StorageRetrievalRequests": self._check_storage_retrieval_requests,
            "ILLRequests": self._check_ill_requests,
        }

    @staticmethod
    def _config_section(function):
        return "TransactionHistory" if function == "transaction_history" else function

    def _supports_all(self, params, *methods):
        driver = self.get_driver()
        return all(driver.supports_method(m, params) for m in methods)

    def _check_transaction_history(self, function_config, params):
        if self._supports_all(params, "get_my_transaction_history"):
            return function_config
        return False

    def _check_storage_retrieval_requests(self, function_config, params):
        if "HMACKeys" not in function_config:
            return False
        if self._supports_all(
            params,
            "get_my_storage_retrieval_requests",
            "check_storage_retrieval_request_is_valid",
            "place_storage_retrieval_request",
        ):
            return function_config
        return False

    def _check_ill_requests(self, function_config, params):
        if "HMACKeys" not in function_config:
            return False
        if self._supports_all(
            params, "get_my_ill_requests", "check_ill_request_is_valid", "place_ill_request"
        ):
            return function_config
        return False
