from tensorzero_client.types.errors import (
    MalformedContentError,
    TensorZeroClientError,
    TensorZeroError,
    TensorZeroInternalError,
    TransportError,
    UnknownVariantError,
)
from tensorzero_client.types.registry import VariantDef, VariantRegistry, WireModel
from tensorzero_client.types.shared import (
    FinishReason,
    OrderBy,
    ProviderExtraBody,
    Tool,
    ToolParams,
    Usage,
    VariantExtraBody,
)
from tensorzero_client.types.content import (
    ContentBlock,
    ContentBlockChunk,
    FileBase64,
    FileURL,
    ImageBase64,
    ImageURL,
    InferenceInput,
    Message,
    RawText,
    Text,
    TextChunk,
    Thought,
    ThoughtChunk,
    ToolCall,
    ToolCallChunk,
    ToolResult,
    UnknownContentBlock,
    decode_content_block,
    decode_content_chunk,
    encode_content_block,
    encode_content_chunk,
)
from tensorzero_client.types.filters import (
    AndFilter,
    BooleanMetricFilter,
    FilterNode,
    FloatMetricFilter,
    NotFilter,
    OrFilter,
    TagFilter,
    TimeFilter,
    decode_filter,
    encode_filter,
)
from tensorzero_client.types.config import (
    BestOfNSamplingConfig,
    ChainOfThoughtConfig,
    ChatCompletionConfig,
    ChatFunctionConfig,
    Config,
    DiclConfig,
    FunctionConfig,
    JsonFunctionConfig,
    MixtureOfNConfig,
    VariantConfig,
    decode_function_config,
    decode_variant_config,
    encode_function_config,
    encode_variant_config,
    load_config,
)
from tensorzero_client.types.optimization import (
    FireworksSFTConfig,
    FireworksSFTJobHandle,
    GCPVertexGeminiSFTConfig,
    GCPVertexGeminiSFTJobHandle,
    OpenAISFTConfig,
    OpenAISFTJobHandle,
    OptimizationConfig,
    OptimizationJobHandle,
    OptimizationJobInfo,
    OptimizationJobStatus,
    decode_job_handle,
    decode_optimization_config,
)
from tensorzero_client.types.inference import (
    ChatChunk,
    ChatInferenceResponse,
    InferenceChunk,
    InferenceRequest,
    InferenceResponse,
    JsonChunk,
    JsonInferenceOutput,
    JsonInferenceResponse,
    ListInferencesRequest,
    StoredInference,
    decode_inference_chunk,
    decode_inference_response,
)
from tensorzero_client.types.datapoint import (
    ChatDatapointInsert,
    Datapoint,
    DatapointInsert,
    JsonDatapointInsert,
    ListDatapointsRequest,
)
from tensorzero_client.types.feedback import (
    DynamicEvaluationRunEpisodeRequest,
    DynamicEvaluationRunEpisodeResponse,
    DynamicEvaluationRunRequest,
    DynamicEvaluationRunResponse,
    FeedbackRequest,
    FeedbackResponse,
)

__all__ = [
    "AndFilter",
    "BestOfNSamplingConfig",
    "BooleanMetricFilter",
    "ChainOfThoughtConfig",
    "ChatChunk",
    "ChatCompletionConfig",
    "ChatDatapointInsert",
    "ChatFunctionConfig",
    "ChatInferenceResponse",
    "Config",
    "ContentBlock",
    "ContentBlockChunk",
    "Datapoint",
    "DatapointInsert",
    "DiclConfig",
    "DynamicEvaluationRunEpisodeRequest",
    "DynamicEvaluationRunEpisodeResponse",
    "DynamicEvaluationRunRequest",
    "DynamicEvaluationRunResponse",
    "FeedbackRequest",
    "FeedbackResponse",
    "FileBase64",
    "FileURL",
    "FilterNode",
    "FinishReason",
    "FireworksSFTConfig",
    "FireworksSFTJobHandle",
    "FloatMetricFilter",
    "FunctionConfig",
    "GCPVertexGeminiSFTConfig",
    "GCPVertexGeminiSFTJobHandle",
    "ImageBase64",
    "ImageURL",
    "InferenceChunk",
    "InferenceInput",
    "InferenceRequest",
    "InferenceResponse",
    "JsonChunk",
    "JsonDatapointInsert",
    "JsonFunctionConfig",
    "JsonInferenceOutput",
    "JsonInferenceResponse",
    "ListDatapointsRequest",
    "ListInferencesRequest",
    "MalformedContentError",
    "Message",
    "MixtureOfNConfig",
    "NotFilter",
    "OpenAISFTConfig",
    "OpenAISFTJobHandle",
    "OptimizationConfig",
    "OptimizationJobHandle",
    "OptimizationJobInfo",
    "OptimizationJobStatus",
    "OrFilter",
    "OrderBy",
    "ProviderExtraBody",
    "RawText",
    "StoredInference",
    "TagFilter",
    "TensorZeroClientError",
    "TensorZeroError",
    "TensorZeroInternalError",
    "Text",
    "TextChunk",
    "Thought",
    "ThoughtChunk",
    "TimeFilter",
    "Tool",
    "ToolCall",
    "ToolCallChunk",
    "ToolParams",
    "ToolResult",
    "TransportError",
    "UnknownContentBlock",
    "UnknownVariantError",
    "Usage",
    "VariantConfig",
    "VariantDef",
    "VariantExtraBody",
    "VariantRegistry",
    "WireModel",
    "decode_content_block",
    "decode_content_chunk",
    "decode_filter",
    "decode_function_config",
    "decode_inference_chunk",
    "decode_inference_response",
    "decode_job_handle",
    "decode_optimization_config",
    "decode_variant_config",
    "encode_content_block",
    "encode_content_chunk",
    "encode_filter",
    "encode_function_config",
    "encode_variant_config",
    "load_config",
]
