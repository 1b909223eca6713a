"""
The main rackctl module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the client's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from rackctl._cogs.configs.configuration import (
    ClientSettings,
    NetworkingSettings,
    CachingSettings,
    AuthenticationSettings,
)
from rackctl._cogs.helpers.typedefs import (
    Logger,
)
from rackctl._cogs.helpers.versions import (
    version as __version__,
)
from rackctl._cogs.helpers.loggers import (
    configure as configure_logging,
    LogFormat,
    RequestLogger,
)
from rackctl._cogs.structs.bodies import (
    RawBody,
    RawFault,
    RawFaultBody,
    Result,
    NoChange,
    NO_CHANGE,
)
from rackctl._cogs.structs.caches import (
    CacheEntry,
    ResponseCache,
)
from rackctl._cogs.structs.credentials import (
    ConnectionInfo,
    LoginInfo,
    LoginError,
)
from rackctl._cogs.structs.options import (
    RequestOptions,
    detailed_path,
)
from rackctl._cogs.clients.auth import (
    APIContext,
)
from rackctl._cogs.clients.errors import (
    APIError,
    APIBadRequestError,
    APIUnauthorizedError,
    APIForbiddenError,
    APINotFoundError,
    APIConflictError,
    APIOverLimitError,
    APIServerError,
)
from rackctl._cogs.clients.api import (
    api,
    api_or_cache,
)
from rackctl._cogs.clients.fetching import (
    PageCallback,
    incrementally_list_resources,
)
from rackctl._cogs.clients.service import (
    list_api_versions,
    list_limits,
)
from rackctl._cogs.clients.images import (
    list_images,
    incrementally_list_images,
    get_image,
    create_image,
)
from rackctl._cogs.clients.flavors import (
    list_flavors,
    incrementally_list_flavors,
    get_flavor,
)
from rackctl._cogs.clients.servers import (
    RebootType,
    list_servers,
    incrementally_list_servers,
    create_server,
    get_server,
    update_server,
    reboot_server,
    rebuild_server,
    resize_server,
    confirm_resized_server,
    revert_resized_server,
    share_ip_address,
    unshare_ip_address,
    delete_server,
)
from rackctl._cogs.clients.backups import (
    get_backup_schedule,
    update_backup_schedule,
    delete_backup_schedule,
)
from rackctl._cogs.clients.sharedips import (
    list_shared_ip_groups,
    incrementally_list_shared_ip_groups,
    create_shared_ip_group,
    get_shared_ip_group,
    delete_shared_ip_group,
)

__all__ = [
    '__version__',
    'ClientSettings',
    'NetworkingSettings',
    'CachingSettings',
    'AuthenticationSettings',
    'Logger',
    'configure_logging',
    'LogFormat',
    'RequestLogger',
    'RawBody', 'RawFault', 'RawFaultBody',
    'Result', 'NoChange', 'NO_CHANGE',
    'CacheEntry',
    'ResponseCache',
    'ConnectionInfo',
    'LoginInfo',
    'LoginError',
    'RequestOptions',
    'detailed_path',
    'APIContext',
    'APIError',
    'APIBadRequestError',
    'APIUnauthorizedError',
    'APIForbiddenError',
    'APINotFoundError',
    'APIConflictError',
    'APIOverLimitError',
    'APIServerError',
    'api',
    'api_or_cache',
    'PageCallback',
    'incrementally_list_resources',
    'list_api_versions',
    'list_limits',
    'list_images',
    'incrementally_list_images',
    'get_image',
    'create_image',
    'list_flavors',
    'incrementally_list_flavors',
    'get_flavor',
    'RebootType',
    'list_servers',
    'incrementally_list_servers',
    'create_server',
    'get_server',
    'update_server',
    'reboot_server',
    'rebuild_server',
    'resize_server',
    'confirm_resized_server',
    'revert_resized_server',
    'share_ip_address',
    'unshare_ip_address',
    'delete_server',
    'get_backup_schedule',
    'update_backup_schedule',
    'delete_backup_schedule',
    'list_shared_ip_groups',
    'incrementally_list_shared_ip_groups',
    'create_shared_ip_group',
    'get_shared_ip_group',
    'delete_shared_ip_group',
]
