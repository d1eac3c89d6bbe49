from enum import Enum

APP_TOOL = 'snowid'

COMMANDS = ['gen', 'parse', 'format', 'bench', 'describe']
ENCODINGS = ['dec', 'base62', 'base36']


class Environment(Enum):
    DEV = 'dev'
    TEST = 'test'
    STAGING = 'staging'
    PROD = 'prod'
