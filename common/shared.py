import logging
from snowid import IdGenerator
from .config import options, ctx


def create_id_generator() -> IdGenerator:
    wait_timeout = options.wait_timeout or None
    return IdGenerator(options.datacenter, options.worker, wait_timeout=wait_timeout)


app_name = options.app_name
ctx.app = app_name
id_generator = create_id_generator()
logging.info(f'{app_name} env: {options.env.value}, datacenter: {options.datacenter}, worker: {options.worker}')
