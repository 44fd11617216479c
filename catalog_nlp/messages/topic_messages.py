# catalog_nlp/messages/topic_messages.py

LDA_COMPLETED = "LDA topic modeling completed with {k} topics ({backend})."
LDA_EMPTY_CORPUS = "Document-term matrix is empty; nothing to model."
LDA_INVALID_TOPICS = "Number of topics must be at least 2."
LDA_UNKNOWN_BACKEND = "Unknown topic modeling backend: {backend}"
LDA_ESTIMATED_K = "Selected k={k} (perplexity {score:.2f})."
TOPIC_LABELING_COMPLETED = "Labeled {n} topics."
LDA_NO_CANDIDATES = "No candidate topic counts given."
LDA_K_REQUIRED = "A topic count or an estimator is required."
LABEL_UNKNOWN_STRATEGY = "Unknown topic labeling strategy: {strategy}"
