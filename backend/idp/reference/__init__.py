from idp.reference.dataset import ReferenceData, get_reference_data, load_reference_data

__all__ = ["ReferenceData", "get_reference_data", "load_reference_data"]
