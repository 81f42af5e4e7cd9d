# python
import logging

from tagged_config import ConfigBuilder, KeyNotFoundError

PROPERTIES = """
service.host=localhost
service.port=8080
service.url=http://${service.host}:${service.port}
@production.service.host=api.example.com
@production.service.port=443
"""

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    config = (
        ConfigBuilder()
        .create_properties_store("defaults")
        .add_text(PROPERTIES)
        .done()
        .create_system_properties_store()
        .add_current_tags_from_env()
        .add_current_tag("production")
        .get_configuration()
    )

    print("Tags:", config.tags)
    print("URL:", config.evaluate_to_string("service.url"))
    print("Port:", config.evaluate_as(int, "service.port"))
    print("Retries:", config.evaluate_to("service.retries", 3))
    try:
        config.evaluate_to_string("service.missing")
    except KeyNotFoundError as exc:
        print("Missing:", exc)
