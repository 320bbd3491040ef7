import os

from libb import Setting

Setting.unlock()

# Log additional settings
log = Setting()
log.report_errors = os.getenv('CONFIG_LOG_REPORT_ERRORS', '1').lower() in {'1', 'true', 'yes'}
log.root_level = os.getenv('CONFIG_LOG_ROOT_LEVEL', 'WARNING')
log.last_resort_level = os.getenv('CONFIG_LOG_LAST_RESORT_LEVEL', 'WARNING')
log.disable = os.getenv('CONFIG_LOG_DISABLE', '')

Setting.lock()
