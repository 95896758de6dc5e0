# This file contains small helper functions shared across the account area:
# resolving the data folder configured in settings.yaml and normalizing
# method names that configuration files give in camelCase.

import os
import re
import logging
from typing import Optional

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_snake_case(name: str) -> str:
    """Convert a camelCase method name to snake_case.

    Already snake_case names are returned unchanged.

    Examples:
        >>> to_snake_case("checkILLRequests")
        'check_ill_requests'
        >>> to_snake_case("finesIcon")
        'fines_icon'
    """
    if not name:
        return ""
    return _CAMEL_BOUNDARY.sub("_", name.strip()).lower()


def get_data_folder_path(app_root_path: Optional[str] = None) -> str:
    """
    Retrieves the data folder path from settings, falling back to config.DEFAULT_DATA_FOLDER.

    Resolves the path to an absolute path relative to the provided
    app_root_path or config.BASE_DIR.

    Args:
        app_root_path (str, optional): The root path of the application or script.
                                      If None, config.BASE_DIR is used. Defaults to None.

    Returns:
        str: The absolute path to the data folder.

    Raises:
        FileNotFoundError: If the resolved folder does not exist.
    """
    from core.settings_loader import get_app_config
    from config import BASE_DIR, DEFAULT_DATA_FOLDER

    data_folder_name = get_app_config().get("data_folder")
    if data_folder_name:
        chosen_path = str(data_folder_name).strip()
        chosen_path_source = "settings (data_folder)"
    else:
        chosen_path = DEFAULT_DATA_FOLDER
        chosen_path_source = "config.DEFAULT_DATA_FOLDER"

    base_path = app_root_path or str(BASE_DIR)

    if os.path.isabs(chosen_path):
        absolute_path = chosen_path
    else:
        absolute_path = os.path.abspath(os.path.join(base_path, chosen_path))
    logger.info(f"Resolved data folder from {chosen_path_source} ('{chosen_path}') to: {absolute_path}")

    if not os.path.isdir(absolute_path):
        error_msg = (
            f"Configured data folder does not exist or is not a directory: {absolute_path}. "
            "Please create the folder or update the data_folder setting."
        )
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    return absolute_path
