# catalog_nlp/messages/pipeline_messages.py

DATA_FILE_NOT_FOUND = "Metadata file not found."
DATA_INVALID_JSON = "Metadata file is not valid JSON."
DATA_MISSING_DATASETS = "Metadata JSON has no 'dataset' array."
DUPLICATE_DATASET_ID = "Duplicate dataset id skipped: {id}"
INGESTION_COMPLETED = "Loaded {datasets} datasets ({keywords} keyword rows)."
COLUMN_MISSING = "Missing '{column}' column."
STEP_SKIPPED = "Skipping step: {step}"
STEP_UNKNOWN = "Invalid step configuration: {step}"
STEP_COMPLETED = "✅ Step {step} completed in {elapsed:.2f} seconds."
STEP_DEPENDENCY_MISSING = "Step {step} needs '{needs}' to run first."
PIPELINE_COMPLETED = "Pipeline execution completed."
REPORT_SAVED = "✅ Report saved to {path}"
CONFIG_FILE_NOT_FOUND = "Pipeline config file not found."
CONFIG_INVALID_YAML = "Pipeline config is not valid YAML."
TOKENIZER_UNKNOWN_METHOD = "Unknown tokenization method: {method}"
