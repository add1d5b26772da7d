import json


class Dict(dict):
    """dot.notation access to dictionary attributes"""
    __getattr__ = dict.__getitem__
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__


DEFAULTS = {
    "tracker": {
        "sigma": 2.0,
        "lr": 0.125,
        "num_pretrain": 0,
        "rotate": False
    },
    "video": {
        "width": 320,
        "height": 240,
        "framerate": 30,
        "duration": 2,
        "bg_color": 40,
        "noise": 0,
        "seed": 0,
        "dir_name": "sample"
    },
    "objects": [
        {
            "kind": "spot",
            "sigma": 1.5,
            "start": [80, 120],
            "speed": [2, 0],
            "amplitude": 200,
            "box": 32
        }
    ]
}


class CustomConfig(object):
    @staticmethod
    def __load__(data):
        if type(data) is dict:
            return CustomConfig.load_dict(data)
        elif type(data) is list:
            return CustomConfig.load_list(data)
        else:
            return data

    @staticmethod
    def load_dict(data: dict):
        result = Dict()
        for key, value in data.items():
            result[key] = CustomConfig.__load__(value)
        return result

    @staticmethod
    def load_list(data: list):
        return [CustomConfig.__load__(item) for item in data]

    @staticmethod
    def merge(base: dict, override: dict):
        """Recursively overlay override on base; lists are replaced whole."""
        result = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = CustomConfig.merge(result[key], value)
            else:
                result[key] = value
        return result

    @staticmethod
    def load_json(path: str):
        with open(path, "r") as f:
            data = json.loads(f.read())
        if type(data) is not dict:
            raise ValueError("Config {} must hold a JSON object".format(path))
        return CustomConfig.__load__(CustomConfig.merge(DEFAULTS, data))

    @staticmethod
    def defaults():
        return CustomConfig.__load__(DEFAULTS)
