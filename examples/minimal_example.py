from tagged_config import ConfigBuilder

if __name__ == "__main__":
    config = ConfigBuilder().create_mapping_store({"greeting": "hello"}).get_configuration()
    print(config["greeting"])
