"""
Factory for building LangChain chains from configuration.

Chains are built on first use and cached, so importing the graph never needs
an API key.
"""

import threading
from typing import Dict

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable, RunnableLambda
from langchain_openai import ChatOpenAI

from config import OPENAI_API_KEY

from .config import CHAIN_CONFIGS, ChainConfig


class ChainFactory:
    """Factory for building LangChain chains from configuration."""

    _cache: Dict[str, Runnable] = {}
    _lock = threading.Lock()

    @staticmethod
    def build_llm(config: ChainConfig) -> ChatOpenAI:
        kwargs = {"model": config.llm_model, "temperature": config.temperature}
        if OPENAI_API_KEY:
            kwargs["api_key"] = OPENAI_API_KEY
        return ChatOpenAI(**kwargs)

    @staticmethod
    def build_chain(config: ChainConfig) -> Runnable:
        """
        Build a LangChain Runnable from configuration.

        Parameters:
            config: ChainConfig defining the chain

        Returns:
            Runnable (prompt | llm | parser)
        """
        llm = ChainFactory.build_llm(config)

        if config.output_type == "vision":
            assert config.message_builder is not None and config.structured_model is not None, \
                f"message_builder and structured_model required for vision chain {config.name}"
            return RunnableLambda(config.message_builder) | llm.with_structured_output(config.structured_model)

        prompt = ChatPromptTemplate.from_messages([
            ("system", config.system_prompt),
            ("human", config.human_prompt_template),
        ])

        if config.output_type == "string":
            return prompt | llm | StrOutputParser()
        elif config.output_type == "structured":
            assert config.structured_model is not None, \
                f"structured_model required for structured output type in {config.name}"
            return prompt | llm.with_structured_output(config.structured_model)
        else:
            raise ValueError(f"Unknown output_type: {config.output_type}")

    @classmethod
    def get_chain(cls, name: str) -> Runnable:
        """
        Return the cached chain for ``name``, building it on first use.

        Raises:
            KeyError: If chain name not found in CHAIN_CONFIGS
        """
        with cls._lock:
            if name not in cls._cache:
                cls._cache[name] = cls.build_chain_by_name(name)
            return cls._cache[name]

    @staticmethod
    def build_chain_by_name(name: str) -> Runnable:
        """
        Build a single chain by name from registry.

        Raises:
            KeyError: If chain name not found in CHAIN_CONFIGS
        """
        if name not in CHAIN_CONFIGS:
            raise KeyError(f"Unknown chain: {name}. Available: {list(CHAIN_CONFIGS.keys())}")
        return ChainFactory.build_chain(CHAIN_CONFIGS[name])
